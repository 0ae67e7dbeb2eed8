import json
from unittest import mock

import pytest
import requests

from reorder_radar import data_handler, settings


class TestReportExport:
    def test_header_and_growth_format(self, make_record):
        record = make_record(product_name="Tee, Crew", current_week_sales=15, last_week_sales=10)
        lines = data_handler.export_report_csv([record]).splitlines()

        assert lines[0] == (
            "Product Name,Barcode,SKU,Current Stock,In Production,Weekly Sales,Growth,Expected Stock-Out"
        )
        # pandas quotes the embedded comma
        assert lines[1].startswith('"Tee, Crew",N/A,BASIC,100,0,15,50.0%,')

    def test_empty_record_set_still_has_header(self):
        assert data_handler.export_report_csv([]).strip().startswith("Product Name,")

    def test_save_outputs_writes_bom_csv(self, make_record, output_dir):
        path = data_handler.save_outputs([make_record()], "inventory_report")

        assert path.parent == output_dir
        assert path.name.startswith("inventory_report_")
        assert path.read_bytes().startswith(b"\xef\xbb\xbf")
        assert not list(output_dir.glob("*.json"))

    def test_save_outputs_json_uses_aliases(self, make_record, output_dir, monkeypatch):
        monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", True)
        data_handler.save_outputs([make_record(product_name="Tee")], "inventory_report")

        (json_path,) = output_dir.glob("*.json")
        payload = json.loads(json_path.read_text(encoding="utf-8"))
        assert payload[0]["productName"] == "Tee"
        assert payload[0]["status"] == "Safe"


class TestFetchSheet:
    def test_returns_body_bytes(self):
        response = mock.Mock(content=b"a,b\n1,2")
        with mock.patch("reorder_radar.data_handler.requests.get", return_value=response) as get:
            assert data_handler.fetch_sheet_bytes("https://example.test/sheet.csv", timeout=3) == b"a,b\n1,2"

        get.assert_called_once_with("https://example.test/sheet.csv", timeout=3)
        response.raise_for_status.assert_called_once()

    def test_http_error_propagates(self):
        response = mock.Mock()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
        with mock.patch("reorder_radar.data_handler.requests.get", return_value=response):
            with pytest.raises(requests.exceptions.HTTPError):
                data_handler.fetch_sheet_bytes("https://example.test/sheet.csv")

    def test_missing_url_is_a_request_error(self):
        with pytest.raises(requests.exceptions.RequestException):
            data_handler.fetch_sheet_bytes("")


def _reply(body: bytes, status: int = 200) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.encoding = "utf-8"
    return response


class TestPostToWebhook:
    def test_json_reply_is_decoded(self):
        with mock.patch(
            "reorder_radar.data_handler.requests.post", return_value=_reply(b'{"recommendations": []}')
        ) as post:
            reply = data_handler.post_to_webhook({"items": []}, "https://example.test/hook", timeout=3)

        assert reply == {"recommendations": []}
        post.assert_called_once_with("https://example.test/hook", json={"items": []}, timeout=3)

    def test_plain_text_reply_is_returned_as_text(self):
        with mock.patch(
            "reorder_radar.data_handler.requests.post", return_value=_reply(b"Reorder the tees first.")
        ):
            reply = data_handler.post_to_webhook({"items": []}, "https://example.test/hook")

        assert reply == "Reorder the tees first."

    def test_empty_reply_is_none(self):
        with mock.patch("reorder_radar.data_handler.requests.post", return_value=_reply(b"")):
            assert data_handler.post_to_webhook({"items": []}, "https://example.test/hook") is None

    def test_http_error_propagates(self):
        with mock.patch("reorder_radar.data_handler.requests.post", return_value=_reply(b"boom", status=500)):
            with pytest.raises(requests.exceptions.HTTPError):
                data_handler.post_to_webhook({"items": []}, "https://example.test/hook")
