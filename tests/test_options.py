"""Tests for DumpOptions."""

import pytest

from graph_dump import DumpOptions, IdentityMode, OptionsError, dump


def test_defaults():
    opts = DumpOptions()
    assert opts.include_static_fields is False
    assert opts.indent == "\t"
    assert opts.identity is IdentityMode.MEMORY


def test_identity_string_is_coerced():
    assert DumpOptions(identity="sequential").identity is IdentityMode.SEQUENTIAL


def test_unknown_identity_rejected():
    with pytest.raises(OptionsError, match="unknown identity mode"):
        DumpOptions(identity="content")


def test_options_error_is_value_error():
    with pytest.raises(ValueError):
        DumpOptions(indent="")


def test_dump_rejects_unknown_option():
    with pytest.raises(TypeError):
        dump([], colour=True)
