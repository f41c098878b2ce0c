from __future__ import annotations

import pytest
from conftest import load

from upnpbindgen.errors import DecodeError
from upnpbindgen.upnp.decode import decode_root, decode_service


def test_decode_root():
    root = decode_root(load("tr64desc.xml"))

    assert root.spec_version.major == 1
    assert root.system_version.display == "154.07.29"
    assert root.system_version.buildnumber == 92042

    device = root.device
    assert device.friendly_name == "FRITZ!Box 7590"
    assert device.udn == "uuid:739f2409-bccb-40e7-8e6c-3431C4E0F2B6"
    assert device.icon_list.icon[0].width == 118
    assert [s.service_type for s in device.services] == [
        "urn:dslforum-org:service:DeviceInfo:1",
        "urn:dslforum-org:service:X_AVM-DE_Dect:1",
    ]
    service = device.services[0]
    assert service.control_url == "/upnp/control/deviceinfo"
    assert service.scpd_url == "/deviceinfoSCPD.xml"
    assert service.event_sub_url == "/upnp/control/deviceinfo"


def test_decode_root_nested_devices():
    device = decode_root(load("tr64desc.xml")).device

    lan, wan = device.devices
    assert lan.upc == "AVM IGD"
    assert len(lan.services) == 1
    assert wan.services == ()
    assert wan.devices[0].device_type == "urn:dslforum-org:device:WANConnectionDevice:1"
    assert [d.device_type.split(":")[3] for d in device.walk()] == [
        "InternetGatewayDevice",
        "LANDevice",
        "WANDevice",
        "WANConnectionDevice",
    ]


def test_decode_root_defaults():
    xml = (
        "<root><specVersion><major>1</major><minor>0</minor></specVersion>"
        "<device><deviceType>urn:x:device:Basic:1</deviceType><friendlyName>box</friendlyName>"
        "</device></root>"
    )
    root = decode_root(xml)

    assert root.system_version is None
    assert root.device.services == ()
    assert root.device.devices == ()
    assert root.device.presentation_url == ""


def test_decode_service():
    description = decode_service(load("wlanconfigSCPD.xml"))

    assert [a.name for a in description.actions] == [
        "SetEnable",
        "GetInfo",
        "SetChannel",
        "X_AVM-DE_GetWLANHybridMode",
    ]
    get_info = description.actions[1]
    assert [(a.name, a.direction, a.related_state_variable) for a in get_info.arguments][:2] == [
        ("NewEnable", "out", "Enable"),
        ("NewStatus", "out", "Status"),
    ]
    assert description.actions[3].arguments == ()

    enable, status, *_, channel = description.state_variables
    assert enable.default_value == "0"
    assert enable.send_events == "no"
    assert status.send_events == "yes"
    assert status.allowed_values == ("Up", "Disabled", "Error")
    assert channel.allowed_value_range.maximum == "165"


def test_decode_service_single_elements_are_lists():
    description = decode_service(load("x_dectSCPD.xml"))

    get_count = description.actions[0]
    assert len(get_count.arguments) == 1
    assert get_count.arguments[0].name == "NewNumberOfEntries"


def test_decode_service_empty_default_value():
    description = decode_service(load("deviceinfoSCPD.xml"))
    provisioning = [v for v in description.state_variables if v.name == "ProvisioningCode"][0]

    assert provisioning.default_value == ""
    assert provisioning.allowed_values == ()


def test_decode_data_type_with_attributes():
    xml = (
        "<scpd><specVersion><major>2</major><minor>0</minor></specVersion>"
        "<serviceStateTable><stateVariable><name>A_ARG_TYPE_Data</name>"
        '<dataType type="urn:schemas-upnp-org:av:avs">string</dataType>'
        "</stateVariable></serviceStateTable></scpd>"
    )
    assert decode_service(xml).state_variables[0].data_type == "string"


def test_decoded_models_are_frozen():
    description = decode_service(load("deviceinfoSCPD.xml"))

    with pytest.raises(Exception):
        description.actions[0].name = "Other"


@pytest.mark.parametrize(
    "xml",
    [
        "<scpd><actionList>",
        "<root><specVersion><major>1</major><minor>0</minor></specVersion></root>",
        "<other/>",
    ],
)
def test_decode_errors(xml):
    with pytest.raises(DecodeError):
        decode_root(xml)


def test_decode_error_on_missing_field():
    xml = (
        "<scpd><specVersion><major>1</major><minor>0</minor></specVersion>"
        "<actionList><action><argumentList><argument><name>NewEnable</name>"
        "</argument></argumentList></action></actionList></scpd>"
    )
    with pytest.raises(DecodeError) as exc_info:
        decode_service(xml)

    assert exc_info.value.document == "scpd"
