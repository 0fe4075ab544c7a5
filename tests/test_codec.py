"""
Tests for the record <-> wire-field codec and the page decoders.
"""

import unittest

from pages import (
    LAN_PAGE,
    LEASES,
    RULE_GAME,
    RULE_SSH,
    RULE_WEB,
    WAN_PAGE,
    data_page,
    indexed,
    port_forward_page,
    result_fields,
)
from zte_onu.codec import (
    bool_from_wire,
    decode_api_result,
    decode_lan_leases,
    decode_rule,
    decode_rules,
    decode_wan_info,
    decode_wan_infos,
    decode_wancs,
    encode_action,
    encode_rule,
    int_from_wire,
    opt_from_wire,
    opt_to_wire,
)
from zte_onu.errors import ParseError
from zte_onu.models import (
    Apply,
    BridgeWan,
    Delete,
    DeleteByName,
    DhcpWan,
    Host,
    MacHost,
    New,
    PPPoEWan,
    Protocol,
)


class TestScalars(unittest.TestCase):
    def test_bool(self):
        self.assertTrue(bool_from_wire("1"))
        self.assertFalse(bool_from_wire("0"))
        with self.assertRaises(ParseError):
            bool_from_wire("yes")

    def test_int(self):
        self.assertEqual(int_from_wire("8080"), 8080)
        with self.assertRaises(ParseError):
            int_from_wire("80a")
        with self.assertRaises(ParseError):
            int_from_wire("")
        with self.assertRaises(ParseError):
            int_from_wire("\u00b2")
        self.assertEqual(int_from_wire(" 22 "), 22)

    def test_null_sentinel(self):
        self.assertIsNone(opt_from_wire("NULL"))
        self.assertIsNone(opt_from_wire(None))
        self.assertEqual(opt_from_wire(""), "")
        self.assertEqual(opt_to_wire(None), "NULL")
        self.assertEqual(opt_to_wire("x"), "x")


class TestRuleCodec(unittest.TestCase):
    def test_decode_host_rule(self):
        rule = decode_rule(RULE_SSH)
        self.assertTrue(rule.enabled)
        self.assertEqual(rule.name, "ssh")
        self.assertEqual(rule.protocol, Protocol.TCP)
        self.assertEqual(rule.wan_view_name, "IGD.WD1.WCD3.WCPPP1")
        self.assertIsNone(rule.remote_address_range)
        self.assertEqual(rule.remote_port_range, (2222, 2222))
        self.assertEqual(rule.local_target, Host("192.168.1.10"))
        self.assertEqual(rule.local_port_range, (22, 22))
        self.assertIsNone(rule.description)
        self.assertEqual(rule.lease_duration, "0")
        self.assertIsNone(rule.creator_tag)

    def test_decode_mac_rule(self):
        rule = decode_rule(RULE_WEB)
        self.assertFalse(rule.enabled)
        self.assertEqual(rule.protocol, Protocol.BOTH)
        self.assertEqual(rule.remote_address_range, ("1.2.3.4", "1.2.3.9"))
        self.assertEqual(rule.local_target, MacHost("00:11:22:33:44:55"))
        self.assertEqual(rule.description, "admin panel")
        self.assertIsNone(rule.lease_duration)
        self.assertEqual(rule.creator_tag, "upnp")

    def test_round_trip(self):
        for raw in (RULE_SSH, RULE_WEB, RULE_GAME):
            with self.subTest(name=raw["Name"]):
                self.assertEqual(encode_rule(decode_rule(raw)), raw)

    def test_encode_emits_exactly_one_target_field(self):
        fields = encode_rule(decode_rule(RULE_WEB))
        self.assertEqual(fields["MacEnable"], "1")
        self.assertIn("InternalMacHost", fields)
        self.assertNotIn("InternalHost", fields)

    def test_flag_disagreeing_with_target_field(self):
        raw = dict(RULE_SSH, MacEnable="1")
        with self.assertRaises(ParseError):
            decode_rule(raw)

    def test_unknown_protocol(self):
        with self.assertRaises(ParseError):
            decode_rule(dict(RULE_SSH, Protocol="7"))

    def test_missing_required_field(self):
        raw = dict(RULE_SSH)
        del raw["MinExtPort"]
        with self.assertRaises(ParseError):
            decode_rule(raw)


class TestIndexedLists(unittest.TestCase):
    def test_rules_follow_declared_count(self):
        body = port_forward_page([RULE_SSH, RULE_WEB, RULE_GAME], "tok")
        rules = decode_rules(body)
        self.assertEqual([r.name for r in rules], ["ssh", "web_ui", "game"])
        self.assertEqual(rules[2].local_target, Host("192.168.1.20"))

    def test_rules_count_zero(self):
        self.assertEqual(decode_rules(port_forward_page([], "tok")), [])

    def test_rules_missing_count(self):
        body = data_page({"Name0": "ssh"})
        with self.assertRaises(ParseError):
            decode_rules(body)

    def test_rules_count_exceeds_records(self):
        fields = indexed([RULE_SSH])
        fields["IF_INSTNUM"] = "2"
        with self.assertRaises(ParseError):
            decode_rules(data_page(fields))

    def test_lan_leases(self):
        leases = decode_lan_leases(LAN_PAGE)
        self.assertEqual(len(leases), len(LEASES))
        self.assertEqual(leases[0].name, "laptop")
        self.assertEqual(leases[0].mac, "00:11:22:33:44:55")
        self.assertEqual(leases[1].ip, "192.168.1.3")
        self.assertEqual(leases[1].lease_time_remaining, "43000")
        self.assertEqual(leases[1].physical_interface_name, "SSID1")

    def test_lan_leases_non_numeric_count(self):
        with self.assertRaises(ParseError):
            decode_lan_leases(data_page({"IF_INSTNUM": "x"}))

    def test_lease_missing_field_reads_empty(self):
        leases = decode_lan_leases(data_page({"IF_INSTNUM": "1", "IPAddr0": "192.168.1.9"}))
        self.assertEqual(leases[0].ip, "192.168.1.9")
        self.assertEqual(leases[0].name, "")


class TestWancs(unittest.TestCase):
    def test_merge(self):
        wancs = decode_wancs(port_forward_page([RULE_SSH], "tok"))
        self.assertEqual(len(wancs), 3)
        self.assertEqual(wancs[0].internal_name, "3_INTERNET_R_VID_")
        self.assertEqual(wancs[0].display_name, "INTERNET")
        self.assertEqual(wancs[0].ip_mode, 1)
        self.assertEqual(wancs[1].view_name, "IGD.WD1.WCD2.WCIP1")
        self.assertEqual(wancs[1].display_name, "1_TR069_VOICE_R_VID_46")
        self.assertEqual(wancs[1].ip_mode, 3)

    def test_script_entry_without_option(self):
        wancs = decode_wancs(port_forward_page([], "tok"))
        self.assertEqual(wancs[2].view_name, "IGD.WD1.WCD4.WCIP1")
        self.assertEqual(wancs[2].ip_mode, -1)


class TestWanInfo(unittest.TestCase):
    def test_page(self):
        wans = decode_wan_infos(WAN_PAGE)
        self.assertEqual(len(wans), 3)
        self.assertIsInstance(wans[0], PPPoEWan)
        self.assertIsInstance(wans[1], DhcpWan)
        self.assertIsInstance(wans[2], BridgeWan)

    def test_pppoe_fields(self):
        wan = decode_wan_infos(WAN_PAGE)[0]
        self.assertEqual(wan.name, "3_INTERNET_R_VID_")
        self.assertEqual(wan.status, "连接")
        self.assertEqual(wan.error_reason, "")
        self.assertEqual(wan.uptime, "1156992秒")
        self.assertEqual(wan.ip_info.nat, "启用")
        self.assertEqual(wan.ip_info.ip, "100.64.12.34")
        self.assertEqual(wan.ip_info.dns3, "0.0.0.0")
        self.assertEqual(wan.ip_info.mac, "aa:bb:cc:dd:ee:01")
        self.assertEqual(wan.ip_info.gateway, "100.64.0.1")

    def test_dhcp_fields(self):
        wan = decode_wan_infos(WAN_PAGE)[1]
        self.assertEqual(wan.lease_time, "3600秒")
        self.assertEqual(wan.ip_info.gateway, "10.20.30.1")

    def test_bridge(self):
        self.assertEqual(decode_wan_infos(WAN_PAGE)[2], BridgeWan(name="2_Other_B_VID_85"))

    def test_dispatch_from_dict(self):
        wan = decode_wan_info({"模式": "PPPoE", "连接名称": "X", "连接状态": "连接"})
        self.assertIsInstance(wan, PPPoEWan)
        self.assertEqual(wan.name, "X")
        self.assertEqual(wan.status, "连接")
        self.assertEqual(wan.mode, "PPPoE")

    def test_unknown_mode(self):
        with self.assertRaises(ParseError):
            decode_wan_info({"模式": "IPoE", "连接名称": "X"})

    def test_missing_mode(self):
        with self.assertRaises(ParseError):
            decode_wan_info({"连接名称": "X"})


class TestActionsAndResult(unittest.TestCase):
    def test_encode_actions(self):
        self.assertEqual(encode_action(New()), {"IF_ACTION": "new", "IF_INDEX": "-1"})
        self.assertEqual(encode_action(Apply(2)), {"IF_ACTION": "apply", "IF_INDEX": "2"})
        self.assertEqual(encode_action(Delete(0)), {"IF_ACTION": "delete", "IF_INDEX": "0"})

    def test_delete_by_name_has_no_wire_form(self):
        with self.assertRaises(ValueError):
            encode_action(DeleteByName("ssh"))

    def test_api_result(self):
        body = data_page(result_fields("SessionTokenError", "_SESSION_TOKEN", "ERROR"))
        result = decode_api_result(body)
        self.assertEqual(result.status_text, "SessionTokenError")
        self.assertEqual(result.param, "_SESSION_TOKEN")
        self.assertEqual(result.kind, "ERROR")
        self.assertFalse(result.ok)
        self.assertFalse(result.succeeded)

    def test_api_result_success(self):
        result = decode_api_result(data_page(result_fields()))
        self.assertTrue(result.ok)
        self.assertTrue(result.succeeded)

    def test_api_result_absent_fields(self):
        result = decode_api_result("<html></html>")
        self.assertTrue(result.is_empty)
        self.assertTrue(result.ok)
        self.assertFalse(result.succeeded)


if __name__ == "__main__":
    unittest.main()
