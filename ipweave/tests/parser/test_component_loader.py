"""
Tests for the component description loader.
"""

# editorconfig-checker-disable-file
# This file contains YAML fixtures that use 2-space indentation per YAML standard

import json

import pytest

from ipweave.errors import SchemaShapeError
from ipweave.model import InterfaceRole, PortDirection
from ipweave.parser import ComponentLoader, ParseError

BLINKY_YAML = """
component:
  name: Blinky
  vendor: sifive.com
  library: blocks
  version: 0.1
  pSchema:
    type: object
    properties:
      dataWidth: {type: integer, default: 32}
  model:
    ports:
      - {name: clk, direction: input}
      - name: irq
        wire: {direction: output, width: 2}
  busInterfaces:
    - name: intr
      busType: {vendor: sifive.com, library: basic, name: interrupts}
      interfaceMode: Master
      abstractionTypes:
        - viewRef: RTLview
          portMaps: {IRQ: irq}
  memoryMaps:
    - name: csr
      addressBlocks:
        - name: ctrl
          baseAddress: 0x1000
          width: 32
          registers:
            - name: CTRL
              addressOffset: "0x4"
              access: read-write
              fields:
                - {name: EN, bits: "[0]", resetValue: 1}
"""


@pytest.fixture
def loader():
    return ComponentLoader()


def test_parse_wrapped_yaml(loader, tmp_path):
    """Test the component: wrapper and the nested model/wire forms."""
    path = tmp_path / "blinky.yml"
    path.write_text(BLINKY_YAML)

    component = loader.parse_file(path)

    assert component.name == "Blinky"
    assert component.version == "0.1"
    assert component.package_name == "sifive.com.blocks.Blinky"
    assert component.get_port("clk").direction == PortDirection.IN
    irq = component.get_port("irq")
    assert irq.direction == PortDirection.OUT
    assert irq.width == 2
    intr = component.get_bus_interface("intr")
    assert intr.role == InterfaceRole.SOURCE
    assert intr.port_map() == {"IRQ": "irq"}
    block = component.memory_maps[0].address_blocks[0]
    assert block.base_address == 0x1000
    register = block.registers[0]
    assert register.address_offset == 4
    assert register.fields[0].bit_offset == 0
    assert register.fields[0].bit_width == 1
    assert register.fields[0].reset_value == 1
    assert component.p_schema.properties["dataWidth"].default == 32


def test_parse_json(loader, tmp_path, blinky_data):
    """Test that JSON descriptions load through the same path."""
    path = tmp_path / "blinky.json"
    path.write_text(json.dumps(blinky_data))

    component = loader.parse_file(path)

    assert component.name == "Blinky"
    assert len(component.ports) == len(blinky_data["ports"])
    assert [b.name for b in component.bus_interfaces] == ["ctrl", "intr"]


def test_parse_dict_without_wrapper(loader):
    component = loader.parse_dict({"name": "Bare", "description": None})
    assert component.name == "Bare"
    assert component.description == ""


def test_invalid_direction_is_a_schema_error(loader):
    data = {"name": "Bad", "ports": [{"name": "p", "direction": "sideways"}]}
    with pytest.raises(SchemaShapeError) as exc_info:
        loader.parse_dict(data)
    assert exc_info.value.value == "sideways"
    assert "in" in exc_info.value.allowed


def test_invalid_access_is_a_schema_error(loader):
    data = {
        "name": "Bad",
        "memoryMaps": [
            {
                "name": "mm",
                "addressBlocks": [
                    {"name": "b", "registers": [{"name": "R", "addressOffset": 0, "access": "rw"}]}
                ],
            }
        ],
    }
    with pytest.raises(SchemaShapeError, match="invalid access field value"):
        loader.parse_dict(data)


def test_invalid_interface_mode_is_a_schema_error(loader):
    data = {
        "name": "Bad",
        "busInterfaces": [{"name": "x", "busType": {"name": "AXI4"}, "interfaceMode": "boss"}],
    }
    with pytest.raises(SchemaShapeError, match="invalid interface mode"):
        loader.parse_dict(data)


def test_missing_name(loader):
    with pytest.raises(ParseError, match="Validation failed"):
        loader.parse_dict({"vendor": "acme"})


def test_unknown_key_is_rejected(loader):
    with pytest.raises(ParseError, match="nonsense"):
        loader.parse_dict({"name": "X", "nonsense": 1})


def test_validation_error_names_file_and_component(loader, tmp_path):
    path = tmp_path / "odd.yml"
    path.write_text("name: Odd\nnonsense: 1\n")
    with pytest.raises(ParseError) as exc_info:
        loader.parse_file(path)
    error = exc_info.value
    assert error.component == "Odd"
    assert str(error).startswith(f"{path.resolve()}: component 'Odd': Validation failed:")
    assert any(issue.startswith("nonsense: ") for issue in error.issues)


def test_root_must_be_a_mapping(loader):
    with pytest.raises(ParseError, match="Root element"):
        loader.parse_dict(["not", "a", "dict"])
    with pytest.raises(ParseError, match="'component' must be"):
        loader.parse_dict({"component": "Blinky"})


def test_missing_file(loader, tmp_path):
    with pytest.raises(ParseError, match="File not found"):
        loader.parse_file(tmp_path / "absent.yml")


def test_yaml_syntax_error_reports_line(loader, tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("name: Broken\nports:\n  - {name: a, direction: in\n")
    with pytest.raises(ParseError) as exc_info:
        loader.parse_file(path)
    assert "YAML syntax error" in str(exc_info.value)
    assert exc_info.value.line is not None
    assert exc_info.value.file_path == path.resolve()
