"""Tests for the command-line interface."""

import io
import json
import os
import unittest
from unittest.mock import patch

from fbx_exporter import cli
from fbx_exporter.exceptions import InvalidTokenError


class TestParseArgs(unittest.TestCase):
    def test_defaults(self):
        args = cli.parse_args(["system/"])
        self.assertEqual(args.paths, ["system/"])
        self.assertEqual(args.base_url, "https://mafreebox.freebox.fr")
        self.assertEqual(args.api_version, 8)
        self.assertIsNone(args.token_file)
        self.assertFalse(args.debug)

    def test_options(self):
        args = cli.parse_args([
            "--base-url", "http://192.168.1.254", "--api-version", "6",
            "--token-file", "token.json", "--debug", "system/", "connection/",
        ])
        self.assertEqual(args.base_url, "http://192.168.1.254")
        self.assertEqual(args.api_version, 6)
        self.assertEqual(args.token_file, "token.json")
        self.assertTrue(args.debug)
        self.assertEqual(args.paths, ["system/", "connection/"])


@patch.dict(os.environ, {"FBX_APP_TOKEN": "env-token"}, clear=True)
@patch("fbx_exporter.cli.setup_logging")
@patch("fbx_exporter.cli.ApplicationIdentity.from_environment")
@patch("fbx_exporter.cli.SessionManager")
@patch("fbx_exporter.cli.Transport")
class TestMain(unittest.TestCase):
    def test_prints_each_result(self, mock_transport, mock_manager, mock_identity, mock_logging):
        mock_manager.return_value.get.side_effect = [{"uptime_val": 5}, {"state": "up"}]

        with patch("sys.stdout", new_callable=io.StringIO) as out:
            cli.main(["system/", "connection/"])

        urls = [c.args[0] for c in mock_manager.return_value.get.call_args_list]
        self.assertEqual(urls, [
            "https://mafreebox.freebox.fr/api/v8/system/",
            "https://mafreebox.freebox.fr/api/v8/connection/",
        ])
        decoder = json.JSONDecoder()
        first, end = decoder.raw_decode(out.getvalue())
        self.assertEqual(first, {"uptime_val": 5})
        mock_transport.return_value.close.assert_called_once()

    def test_login_failure_exits(self, mock_transport, mock_manager, mock_identity, mock_logging):
        mock_manager.side_effect = InvalidTokenError("Unknown app token", error_code="invalid_token")

        with self.assertRaises(SystemExit) as ctx:
            cli.main(["system/"])

        self.assertEqual(ctx.exception.code, 1)
        mock_transport.return_value.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
