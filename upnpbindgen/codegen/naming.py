"""Wire identifier to Python identifier normalization.

TR-064 and IGD names are upper camel case with vendor prefixes and acronym
runs (``NewX_AVM-DE_WLANGuestSSID``). Known prefixes and acronyms are first
rewritten to single-word casing by one priority-ordered rule table, then every
remaining uppercase letter starts a new snake case word.
"""
from __future__ import annotations

import keyword
import re
from typing import NamedTuple


class Rule(NamedTuple):
    pattern: str
    replacement: str


# Order is precedence: at each position the first matching rule wins, so a
# long acronym must come before any acronym it contains.
RULES: tuple[Rule, ...] = (
    Rule("NewX_AVM-DE_", "newXAvmDe"),
    Rule("NewX_AVM_DE_", "newXAvmDe"),
    Rule("X_AVM-DE_", "XAvmDe"),
    Rule("X_", "x"),
    Rule("_", ""),
    Rule("NATRSIP", "NatRsip"),
    Rule("NAT", "Nat"),
    Rule("RSIP", "Rsip"),
    Rule("FCS", "Fcs"),
    Rule("ATM", "Atm"),
    Rule("DAV", "Dav"),
    Rule("PPP", "Ppp"),
    Rule("WAN", "Wan"),
    Rule("MAC", "Mac"),
    Rule("AIN", "Ain"),
    Rule("DDNS", "Ddns"),
    Rule("DNS", "Dns"),
    Rule("IPTVo", "IptvO"),
    Rule("IPTV", "Iptv"),
    Rule("US", "Us"),
    Rule("VoIP", "Voip"),
    Rule("AVM", "Avm"),
    Rule("URL", "Url"),
    Rule("ATUC", "Atuc"),
    Rule("CHECK", "Check"),
    Rule("DSL", "Dsl"),
    Rule("DS", "Ds"),
    Rule("SNRG", "Snrg_"),
    Rule("SNRMT", "Snrmt_"),
    Rule("SNR", "Snr_"),
    Rule("LATN", "Latn_"),
    Rule("HEC", "Hec"),
    Rule("TAM", "Tam"),
    Rule("OKZ", "Okz"),
    Rule("LKZ", "Lkz"),
    # duplicate of the OKZ rule above, never reached
    Rule("OKZ", "Okz"),
    Rule("STUN", "Stun"),
    Rule("UPnP", "Upnp"),
    Rule("FTP", "Ftp"),
    Rule("SSL", "Ssl"),
    Rule("SMB", "Smb"),
    Rule("CGI", "Cgi"),
    Rule("NTP", "Ntp"),
    Rule("TR069", "Tr069"),
    Rule("BSSID", "Bssid"),
    Rule("SSID", "Ssid"),
    Rule("SID", "Sid"),
    Rule("UUID", "Uuid"),
    Rule("OUI", "Oui"),
    Rule("ATUR", "Atur"),
    Rule("FEC", "Fec"),
    Rule("CRC", "Crc"),
    Rule("PSK", "Psk"),
    Rule("WEP", "Wep"),
    Rule("WPA", "Wpa"),
    Rule("WLAN", "Wlan"),
    Rule("LAN", "Lan"),
    Rule("AP", "Ap"),
    Rule("WPS", "Wps"),
    Rule("RX", "Rx"),
    Rule("WOL", "Wol"),
    Rule("DHCP", "Dhcp"),
    Rule("ID", "Id"),
    Rule("IP", "Ip"),
)

# one group per rule, so match.lastindex points back into RULES
_RULES_RE = re.compile("|".join(f"({re.escape(rule.pattern)})" for rule in RULES))
_INVALID_RE = re.compile("[^a-z0-9_]")
_CLASS_INVALID_RE = re.compile("[^A-Za-z0-9]")


def duplicate_rules() -> list[tuple[int, Rule]]:
    """Rules whose pattern already appears earlier in the table."""
    seen = set()
    duplicates = []
    for index, rule in enumerate(RULES):
        if rule.pattern in seen:
            duplicates.append((index, rule))
        seen.add(rule.pattern)
    return duplicates


def rewrite(identifier: str) -> str:
    """Apply the rule table in a single left-to-right pass."""
    return _RULES_RE.sub(lambda match: RULES[match.lastindex - 1].replacement, identifier)


def snake_case(identifier: str) -> str:
    chars = []
    for position, char in enumerate(identifier):
        if char.isupper():
            if position:
                chars.append("_")
            chars.append(char.lower())
        else:
            chars.append(char)
    return "".join(chars)


def normalize(identifier: str) -> str:
    name = _INVALID_RE.sub("", snake_case(rewrite(identifier)))
    if not name:
        return "_"
    if name[0].isdigit():
        name = f"_{name}"
    if keyword.iskeyword(name):
        name = f"{name}_"
    return name


def class_name(identifier: str) -> str:
    name = _CLASS_INVALID_RE.sub("", identifier)
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name
