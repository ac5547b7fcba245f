"""Tests for generation options."""

import pytest
from pydantic import ValidationError

from ipweave.config import GenerationOptions


def test_defaults():
    options = GenerationOptions()
    assert options.rtl_view == "RTLview"
    assert options.validate_output is False
    assert options.include_regmap is True
    assert options.include_monitor is True
    assert options.file_extension == ".scala"


def test_from_yaml(tmp_path):
    path = tmp_path / "options.yml"
    path.write_text("rtlView: SIMview\nvalidate: true\nincludeMonitor: false\nfileExtension: sc\n")
    options = GenerationOptions.from_yaml(path)
    assert options.rtl_view == "SIMview"
    assert options.validate_output is True
    assert options.include_monitor is False
    assert options.file_extension == ".sc"


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "options.yml"
    path.write_text("")
    assert GenerationOptions.from_yaml(path) == GenerationOptions()


def test_python_names_are_accepted():
    options = GenerationOptions(validate_output=True, include_regmap=False)
    assert options.validate_output
    assert not options.include_regmap


def test_unknown_option_is_rejected():
    with pytest.raises(ValidationError):
        GenerationOptions(verbose=True)
