"""
Test the pydantic models with example data.
"""

import pytest
from pydantic import ValidationError

from ipweave.model import (
    VLNV,
    AccessType,
    BusInterface,
    BusInterfaceMode,
    Component,
    FieldDef,
    InterfaceRole,
    ParamNode,
    Port,
    PortDirection,
    RegisterDef,
)


def test_vlnv_from_string():
    vlnv = VLNV.from_string("amba.com:AMBA4:AXI4:r0p0_0")
    assert vlnv.library == "AMBA4"
    assert vlnv.full_name == "amba.com:AMBA4:AXI4:r0p0_0"
    with pytest.raises(ValueError, match="expected 4 colon-separated parts"):
        VLNV.from_string("AXI4")


def test_vlnv_only_name_is_required():
    vlnv = VLNV(name=" AXI4 ", version=4)
    assert vlnv.name == "AXI4"
    assert vlnv.version == "4"
    assert vlnv.vendor == ""
    with pytest.raises(ValidationError):
        VLNV(name="  ")


class TestPort:
    @pytest.mark.parametrize(
        "direction, expected",
        [
            ("in", PortDirection.IN),
            ("Input", PortDirection.IN),
            ("output", PortDirection.OUT),
            ("inout", PortDirection.INOUT),
            ("analog", PortDirection.INOUT),
        ],
    )
    def test_direction_aliases(self, direction, expected):
        assert Port(name="p", direction=direction).direction == expected

    def test_chisel_directions(self):
        assert PortDirection.IN.chisel == "Input"
        assert PortDirection.OUT.chisel == "Output"
        assert PortDirection.INOUT.chisel == "Analog"

    def test_wire_form(self):
        port = Port.model_validate({"name": "d", "wire": {"direction": "out", "width": 8}})
        assert port.direction == PortDirection.OUT
        assert port.width == 8

    def test_width_must_be_positive(self):
        with pytest.raises(ValidationError):
            Port(name="p", direction="in", width=0)

    def test_models_are_frozen(self):
        port = Port(name="p", direction="in")
        with pytest.raises(ValidationError):
            port.width = 2


class TestBusInterface:
    @pytest.mark.parametrize(
        "mode, role",
        [
            ("master", InterfaceRole.SOURCE),
            ("source", InterfaceRole.SOURCE),
            ("slave", InterfaceRole.SINK),
            ("SINK", InterfaceRole.SINK),
            ("monitor", InterfaceRole.MONITOR),
        ],
    )
    def test_roles(self, mode, role):
        bus = BusInterface(name="b", bus_type={"name": "AXI4"}, interface_mode=mode)
        assert bus.role == role

    def test_port_map_by_view(self):
        bus = BusInterface.model_validate(
            {
                "name": "b",
                "busType": {"name": "AXI4"},
                "interfaceMode": "slave",
                "abstractionTypes": [
                    {"viewRef": "RTLview", "portMaps": {"AWVALID": "awvalid"}},
                    {"viewRef": "TLMview", "portMaps": {"AWVALID": "tlm_awvalid"}},
                ],
                "props": {"maxBurst": 8},
            }
        )
        assert bus.interface_mode == BusInterfaceMode.SLAVE
        assert bus.port_map() == {"AWVALID": "awvalid"}
        assert bus.port_map("TLMview") == {"AWVALID": "tlm_awvalid"}
        assert bus.port_map("missing") == {}
        assert bus.prop("maxBurst") == 8
        assert bus.prop("canInterleave", True) is True


class TestMemoryMapModels:
    def test_access_parse(self):
        assert AccessType.parse("read-only") == AccessType.READ_ONLY
        assert AccessType.parse(AccessType.WRITE_ONLY) == AccessType.WRITE_ONLY

    def test_bits_notation(self):
        field = FieldDef.model_validate({"name": "F", "bits": "[7:4]"})
        assert (field.bit_offset, field.bit_width) == (4, 4)
        assert field.bit_range == "[7:4]"

    def test_explicit_offsets_win_over_bits(self):
        field = FieldDef.model_validate({"bits": "[7:4]", "bitOffset": 1, "bitWidth": 2})
        assert (field.bit_offset, field.bit_width) == (1, 2)

    def test_numeric_strings(self):
        register = RegisterDef.model_validate({"name": "R", "addressOffset": "0x10", "size": "32"})
        assert register.address_offset == 16
        assert register.hex_address == "0x10"

    def test_vendor_extensions_are_ignored(self):
        register = RegisterDef.model_validate(
            {"name": "R", "addressOffset": 0, "vendorExtensions": {"x": 1}}
        )
        assert register.name == "R"


class TestParamSchema:
    def test_invalid_type(self):
        with pytest.raises(ValidationError, match="invalid parameter type"):
            ParamNode(type="string")

    def test_integer_cannot_have_properties(self):
        with pytest.raises(ValidationError, match="cannot have properties"):
            ParamNode.model_validate({"type": "integer", "properties": {"a": {"type": "integer"}}})

    def test_object_cannot_have_default(self):
        with pytest.raises(ValidationError, match="cannot have a default"):
            ParamNode(type="object", default=1)


class TestComponent:
    def test_package_name_skips_empty_parts(self):
        assert Component(name="X").package_name == "X"
        assert Component(name="X", vendor="acme.com", library="").package_name == "acme.com.X"

    def test_empty_schema_is_none(self):
        assert Component(name="X", p_schema={}).p_schema is None

    def test_lookups(self, blinky):
        assert blinky.get_port("irq").width == 2
        assert blinky.get_port("nope") is None
        assert blinky.get_memory_map("csr").total_registers == 2
        assert blinky.total_registers == 2
        assert [b.name for b in blinky.interfaces_with_role(InterfaceRole.SINK)] == ["ctrl"]
        assert blinky.monitor_interfaces == []
        assert blinky.vlnv.full_name == "sifive.com:blocks:Blinky:0.1.0"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Component(name="   ")

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            Component(name="X", colour="red")
