"""
Tests for the request engine: token spending, session rotation, result
classification and raw-body persistence.
"""

import tempfile
import unittest
from pathlib import Path

import requests

from pages import BASE, NEXT, ScriptedHttp, data_page, page, result_fields, session_script
from zte_onu.auth.session import Session
from zte_onu.engine import RequestEngine
from zte_onu.errors import AuthenticationError, TransportError


class TestPrepare(unittest.TestCase):
    def setUp(self):
        self.engine = RequestEngine(ScriptedHttp(), BASE)
        self.session = Session(next_page_path="getpage.gch?pid=1002&nextpage=", auth_token="tok1")

    def test_url_uses_next_page_path(self):
        call, _ = self.engine.prepare(self.session, "GET", "app_virtual_conf_t.gch")
        self.assertEqual(
            call.url,
            "http://192.168.1.1/getpage.gch?pid=1002&nextpage=app_virtual_conf_t.gch",
        )

    def test_url_before_login_uses_default_path(self):
        call, session = self.engine.prepare(None, "GET", "x.gch")
        self.assertEqual(call.url, f"{BASE}/{NEXT}x.gch")
        self.assertIsNone(session)

    def test_get_does_not_spend_token(self):
        call, session = self.engine.prepare(self.session, "GET", "x.gch")
        self.assertIsNone(call.form)
        self.assertEqual(session.auth_token, "tok1")

    def test_form_carries_token_and_spends_it(self):
        form = {"IF_ACTION": "delete", "IF_INDEX": "0"}
        call, session = self.engine.prepare(self.session, "POST", "x.gch", form)
        self.assertEqual(call.form["_SESSION_TOKEN"], "tok1")
        self.assertEqual(call.form["IF_ACTION"], "delete")
        self.assertNotIn("_SESSION_TOKEN", form)
        self.assertIsNone(session.auth_token)

    def test_spent_token_cannot_be_reused(self):
        _, spent = self.engine.prepare(self.session, "POST", "x.gch", {"a": "b"})
        with self.assertRaises(AuthenticationError):
            self.engine.prepare(spent, "POST", "x.gch", {"a": "b"})

    def test_form_before_login_has_no_token(self):
        call, _ = self.engine.prepare(None, "POST", "x.gch", {"a": "b"})
        self.assertEqual(call.form, {"a": "b"})


class TestExecute(unittest.TestCase):
    def setUp(self):
        self.session = Session(next_page_path=NEXT, auth_token="tok1")

    def test_rotates_session_and_reads_result(self):
        body = data_page(result_fields(), token="tok2")
        http = ScriptedHttp(body)
        response = RequestEngine(http, BASE).send(self.session, "POST", "x.gch", {"a": "b"})
        self.assertEqual(response.session.auth_token, "tok2")
        self.assertEqual(response.result.status_text, "SUCC")
        self.assertTrue(response.result.ok)
        self.assertEqual(response.body, body)
        method, _, data = http.calls[0]
        self.assertEqual(method, "POST")
        self.assertEqual(data["_SESSION_TOKEN"], "tok1")

    def test_two_submissions_never_share_a_token(self):
        http = ScriptedHttp(data_page(result_fields(), token="tok2"),
                            data_page(result_fields(), token="tok3"))
        engine = RequestEngine(http, BASE)
        first = engine.send(self.session, "POST", "x.gch", {"a": "1"})
        engine.send(first.session, "POST", "x.gch", {"a": "2"})
        self.assertEqual([c[2]["_SESSION_TOKEN"] for c in http.calls], ["tok1", "tok2"])

    def test_body_without_token_leaves_token_spent(self):
        http = ScriptedHttp(data_page(result_fields()))
        response = RequestEngine(http, BASE).send(self.session, "POST", "x.gch", {"a": "b"})
        self.assertIsNone(response.session.auth_token)

    def test_rejection_is_reported_not_raised(self):
        http = ScriptedHttp(data_page(result_fields("ParamError", "Name", "ERROR"), token="t"))
        response = RequestEngine(http, BASE).send(self.session, "POST", "x.gch", {"a": "b"})
        self.assertFalse(response.result.ok)
        self.assertEqual(response.result.param, "Name")

    def test_empty_status_logged_as_warning(self):
        http = ScriptedHttp(page(session_script("t")))
        with self.assertLogs("zte-onu", level="WARNING"):
            response = RequestEngine(http, BASE).send(self.session, "GET", "x.gch")
        self.assertTrue(response.result.ok)

    def test_transport_error(self):
        http = ScriptedHttp(requests.ConnectionError("refused"))
        engine = RequestEngine(http, BASE)
        call, spent = engine.prepare(self.session, "POST", "x.gch", {"a": "b"})
        with self.assertRaises(TransportError):
            engine.execute(call, spent)
        self.assertIsNone(spent.auth_token)

    def test_body_saved(self):
        body = data_page(result_fields(), token="tok2")
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "dump" / "last.html"
            RequestEngine(ScriptedHttp(body), BASE, save_path=path).send(
                self.session, "GET", "x.gch")
            self.assertEqual(path.read_text(encoding="utf-8"), body)

    def test_save_failure_only_warns(self):
        body = data_page(result_fields(), token="tok2")
        with tempfile.TemporaryDirectory() as tmp:
            engine = RequestEngine(ScriptedHttp(body), BASE, save_path=Path(tmp))
            with self.assertLogs("zte-onu", level="WARNING") as logs:
                response = engine.send(self.session, "POST", "x.gch", {"a": "b"})
        self.assertIn("Could not save", "\n".join(logs.output))
        self.assertEqual(response.session.auth_token, "tok2")
        self.assertTrue(response.result.succeeded)


if __name__ == "__main__":
    unittest.main()
