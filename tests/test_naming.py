from __future__ import annotations

import pytest

from upnpbindgen.codegen.naming import (
    RULES,
    Rule,
    class_name,
    duplicate_rules,
    normalize,
    rewrite,
    snake_case,
)


@pytest.mark.parametrize(
    "wire, expected",
    [
        ("NewManufacturerName", "new_manufacturer_name"),
        ("NewUpTime", "new_up_time"),
        ("NewSSID", "new_ssid"),
        ("NewBSSID", "new_bssid"),
        ("NewID", "new_id"),
        ("NewExternalIPAddress", "new_external_ip_address"),
        ("WANIPConnection", "wan_ip_connection"),
        ("WANPPPConnection", "wan_ppp_connection"),
        ("WLANConfiguration", "wlan_configuration"),
        ("DeviceInfo", "device_info"),
        ("X_AVM-DE_Dect", "x_avm_de_dect"),
        ("NewX_AVM-DE_TAMEnabled", "new_x_avm_de_tam_enabled"),
        ("NewX_AVM_DE_Foo", "new_x_avm_de_foo"),
        ("NewIPTVoverDSL", "new_iptv_over_dsl"),
        ("NewVoIPNumber", "new_voip_number"),
        ("NewDDNSHost", "new_ddns_host"),
        ("NATRSIPStatus", "nat_rsip_status"),
    ],
)
def test_normalize(wire, expected):
    assert normalize(wire) == expected


def test_unknown_acronym_is_split_per_letter():
    assert normalize("NewXYZValue") == "new_x_y_z_value"


def test_leading_digit():
    assert normalize("3GEnabled") == "_3_g_enabled"


def test_keywords_are_suffixed():
    assert normalize("In") == "in_"
    assert normalize("Class") == "class_"


def test_invalid_characters_are_dropped():
    assert normalize("Foo-Bar") == "foo_bar"
    assert normalize("") == "_"


@pytest.mark.parametrize(
    "wire",
    ["NewX_AVM-DE_WLANGuestSSID", "1stValue", "GetSpecificPortMappingEntry", "ÄÖÜ", "NewIPv6Prefix"],
)
def test_normalize_is_safe_and_deterministic(wire):
    name = normalize(wire)

    assert name == normalize(wire)
    assert name.isidentifier()
    assert not name[0].isdigit()
    assert name == name.lower()


def test_long_acronyms_take_precedence():
    assert rewrite("BSSID") == "Bssid"
    assert rewrite("NATRSIP") == "NatRsip"
    assert rewrite("DDNS") == "Ddns"
    assert rewrite("WLAN") == "Wlan"
    assert rewrite("DSL") == "Dsl"


def test_rewrite_is_a_single_pass():
    assert rewrite("X_IP") == "xIp"
    # dropping "_" does not expose "DSL" to a second match
    assert rewrite("D_SL") == "DSL"
    assert rewrite("SNRG") == "Snrg_"


def test_duplicate_rule_is_shadowed():
    duplicates = duplicate_rules()

    assert [rule for _, rule in duplicates] == [Rule("OKZ", "Okz")]
    index, rule = duplicates[0]
    assert RULES.index(rule) < index
    assert normalize("NewOKZ") == "new_okz"


def test_snake_case():
    assert snake_case("GetInfo") == "get_info"
    assert snake_case("getInfo") == "get_info"


def test_class_name():
    assert class_name("GetInfo") == "GetInfo"
    assert class_name("X_AVM-DE_GetWLANHybridMode") == "XAVMDEGetWLANHybridMode"
    assert class_name("3rdParty") == "_3rdParty"
    assert class_name("Get.Info Now") == "GetInfoNow"
