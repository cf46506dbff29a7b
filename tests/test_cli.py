import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from readiness_gate import cli
from readiness_gate.contracts.endpoint import EndpointDescriptor
from readiness_gate.contracts.probe_outcome import FleetResult, ProbeOutcome


def result(*health):
    return FleetResult.from_outcomes(
        ProbeOutcome(
            endpoint=EndpointDescriptor(address=f"http://svc{i}.internal/health", max_wait=1),
            healthy=healthy,
        )
        for i, healthy in enumerate(health)
    )


@patch("readiness_gate.cli.setup_logging")
class TestCli(unittest.TestCase):
    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(argv)
        return code, out.getvalue()

    @patch("readiness_gate.cli.run_fleet")
    def test_all_healthy_exits_zero(self, mock_run_fleet, mock_setup_logging):
        mock_run_fleet.return_value = result(True, True)
        code, out = self.run_main(
            ["--healthcheck=http://svc0.internal/health,1", "--healthcheck", "http://svc1.internal/health,1"]
        )
        self.assertEqual(code, cli.EXIT_OK)
        endpoints = mock_run_fleet.call_args[0][0]
        self.assertEqual([e.url for e in endpoints], ["http://svc0.internal/health", "http://svc1.internal/health"])
        self.assertIn("svc0.internal: ready", out)

    @patch("readiness_gate.cli.run_fleet")
    def test_unhealthy_exits_one(self, mock_run_fleet, mock_setup_logging):
        mock_run_fleet.return_value = result(True, False)
        code, out = self.run_main(["--healthcheck=http://svc0.internal/health,1"])
        self.assertEqual(code, cli.EXIT_UNHEALTHY)
        self.assertIn("svc1.internal: NOT ready", out)

    @patch("readiness_gate.cli.run_fleet")
    def test_malformed_endpoint_exits_two_without_probing(self, mock_run_fleet, mock_setup_logging):
        with self.assertLogs("readiness_gate.cli", level="ERROR"):
            code, _ = self.run_main(["--healthcheck=http://svc0.internal/health,soon"])
        self.assertEqual(code, cli.EXIT_CONFIG_ERROR)
        mock_run_fleet.assert_not_called()

    @patch("readiness_gate.cli.run_fleet")
    def test_out_of_range_wait_exits_two(self, mock_run_fleet, mock_setup_logging):
        with self.assertLogs("readiness_gate.cli", level="ERROR") as cm:
            code, _ = self.run_main(["--healthcheck=http://svc0.internal/health,100000000000000"])
        self.assertEqual(code, cli.EXIT_CONFIG_ERROR)
        self.assertIn("out of range", cm.output[0])
        mock_run_fleet.assert_not_called()

    @patch("readiness_gate.cli.run_fleet", side_effect=KeyboardInterrupt)
    def test_interrupt_exits_130(self, mock_run_fleet, mock_setup_logging):
        with self.assertLogs("readiness_gate.cli", level="ERROR"):
            code, _ = self.run_main(["--healthcheck=http://svc0.internal/health,1"])
        self.assertEqual(code, cli.EXIT_INTERRUPTED)

    def test_no_endpoints_exits_zero(self, mock_setup_logging):
        code, out = self.run_main([])
        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(out, "")

    def test_log_level_is_passed_to_logging_setup(self, mock_setup_logging):
        self.run_main(["--log-level", "DEBUG"])
        mock_setup_logging.assert_called_once_with("DEBUG")


if __name__ == "__main__":
    unittest.main()
