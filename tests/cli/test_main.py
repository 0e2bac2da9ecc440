"""Tests for the command line interface."""

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from k8s_report.cli.main import app
from k8s_report.exceptions import ConverterNotFoundError, PdfConversionError

runner = CliRunner()


@pytest.fixture
def fake_client(mock_client):
    """Patch K8sClient construction in the CLI."""
    with patch("k8s_report.cli.main.K8sClient", return_value=mock_client) as client_class:
        yield client_class


@pytest.mark.unit
class TestReportCommand:
    def test_no_kubeconfig(self, clean_env):
        """Test a missing kubeconfig exits with code 1."""
        result = runner.invoke(app, ["report"])

        assert result.exit_code == 1
        assert "No kubeconfig file found" in result.output

    def test_console_report(self, clean_env, kubeconfig_file, fake_client):
        """Test the default mode prints the plain report."""
        result = runner.invoke(app, ["report"])

        assert result.exit_code == 0
        assert "=== Kubernetes Cluster Explorer ===" in result.output
        assert "1. Cluster Info:" in result.output
        assert "```" not in result.output
        fake_client.assert_called_once_with(kubeconfig=kubeconfig_file)

    def test_env_kubeconfig(self, clean_env, kubeconfig_file, fake_client, monkeypatch, tmp_path):
        """Test KUBECONFIG is used when no flag is given."""
        other = tmp_path / "other-config"
        other.write_text("kind: Config\n")
        monkeypatch.setenv("KUBECONFIG", str(other))

        result = runner.invoke(app, ["report"])

        assert result.exit_code == 0
        fake_client.assert_called_once_with(kubeconfig=other)

    def test_markdown_report(self, clean_env, kubeconfig_file, fake_client):
        """Test --markdown writes the default report file."""
        result = runner.invoke(app, ["report", "--markdown"])

        assert result.exit_code == 0
        report = clean_env / "k8s_resources_report.md"
        content = report.read_text()
        assert content.startswith("# Kubernetes Cluster Report")
        assert "## 10. Secrets" in content

    def test_short_options(self, clean_env, kubeconfig_file, fake_client):
        """Test the short option spellings."""
        result = runner.invoke(
            app, ["report", "-k", str(kubeconfig_file), "-md", "-mn", "custom.md"]
        )

        assert result.exit_code == 0
        assert (clean_env / "custom.md").exists()

    def test_invalid_kubeconfig_path(self, clean_env, fake_client):
        """Test an explicit path that does not exist exits with code 1."""
        result = runner.invoke(app, ["report", "-k", "missing.yaml"])

        assert result.exit_code == 1
        assert "Kubeconfig file not found" in result.output
        fake_client.assert_not_called()

    def test_kubectl_missing(self, clean_env, kubeconfig_file):
        """Test a missing kubectl binary exits with code 1."""
        with patch(
            "k8s_report.cli.main.K8sClient",
            side_effect=RuntimeError("kubectl command not found. Please install kubectl."),
        ):
            result = runner.invoke(app, ["report", "--markdown"])

        assert result.exit_code == 1
        assert "kubectl command not found" in result.output

    def test_metrics_server_flag(self, clean_env, kubeconfig_file, fake_client):
        """Test --metrics-server runs the installer before the report."""
        with patch("k8s_report.cli.main.MetricsServerInstaller") as installer_class:
            installer_class.return_value.ensure_installed.return_value = False
            result = runner.invoke(app, ["report", "--metrics-server"])

        assert result.exit_code == 0
        installer_class.return_value.ensure_installed.assert_called_once()
        assert "metrics server is not ready" in result.output

    def test_pdf_with_markdown(self, clean_env, kubeconfig_file, fake_client):
        """Test --markdown --pdf keeps the Markdown beside the PDF."""
        with patch("k8s_report.cli.main.PdfConverter") as converter_class:
            converter_class.return_value.convert.return_value = clean_env / "k8s_resources_report.pdf"
            result = runner.invoke(app, ["report", "--markdown", "--pdf"])

        assert result.exit_code == 0
        converter_class.return_value.convert.assert_called_once_with(
            clean_env / "k8s_resources_report.md", clean_env / "k8s_resources_report.pdf"
        )
        assert (clean_env / "k8s_resources_report.md").exists()

    def test_pdf_only_removes_temporary_markdown(self, clean_env, kubeconfig_file, fake_client):
        """Test PDF-only mode cleans up its intermediate Markdown."""
        with patch("k8s_report.cli.main.PdfConverter") as converter_class:
            converter_class.return_value.convert.return_value = clean_env / "k8s_resources_report.pdf"
            result = runner.invoke(app, ["report", "--pdf"])

        assert result.exit_code == 0
        markdown_file, pdf_file = converter_class.return_value.convert.call_args[0]
        assert pdf_file == clean_env / "k8s_resources_report.pdf"
        assert not Path(markdown_file).exists()
        assert not (clean_env / "k8s_resources_report.md").exists()

    def test_pdf_without_pandoc(self, clean_env, kubeconfig_file, fake_client):
        """Test a missing converter reports, exits 1 and keeps the Markdown."""
        with patch("k8s_report.cli.main.PdfConverter") as converter_class:
            converter_class.return_value.convert.side_effect = ConverterNotFoundError(
                "pandoc is not installed.", ["Install pandoc on Linux with: sudo apt install pandoc"]
            )
            result = runner.invoke(app, ["report", "--markdown", "--pdf"])

        assert result.exit_code == 1
        assert "pandoc is not installed" in result.output
        assert "sudo apt install pandoc" in result.output
        assert (clean_env / "k8s_resources_report.md").exists()

    def test_pdf_only_failure_preserves_markdown(self, clean_env, kubeconfig_file, fake_client):
        """Test a failed PDF-only conversion keeps the temporary Markdown."""
        with patch("k8s_report.cli.main.PdfConverter") as converter_class:
            converter_class.return_value.convert.side_effect = PdfConversionError(
                "Failed to convert markdown to PDF"
            )
            result = runner.invoke(app, ["report", "--pdf"])

        assert result.exit_code == 1
        assert "preserved" in result.output
        markdown_file = Path(converter_class.return_value.convert.call_args[0][0])
        try:
            assert markdown_file.exists()
        finally:
            markdown_file.unlink()

    def test_help(self):
        """Test -h shows help."""
        result = runner.invoke(app, ["report", "-h"])

        assert result.exit_code == 0
        assert "--kubeconfig" in result.output


@pytest.mark.unit
class TestRetrieveKubeconfigCommand:
    def test_copies_found_kubeconfig(self, clean_env, tmp_path, kubeconfig_file):
        """Test the found kubeconfig lands in ./kubeconfig.yaml."""
        source = tmp_path / "source-config"
        source.write_text(kubeconfig_file.read_text())
        kubeconfig_file.unlink()

        with patch("k8s_report.cli.main.find_kubeconfig", return_value=source), patch(
            "k8s_report.cli.main.check_cluster_access", return_value=True
        ):
            result = runner.invoke(app, ["retrieve-kubeconfig"])

        assert result.exit_code == 0
        assert (clean_env / "kubeconfig.yaml").read_text() == source.read_text()
        assert "YAML syntax is valid" in result.output

    def test_existing_target_declined(self, clean_env, tmp_path, kubeconfig_file):
        """Test declining the overwrite prompt leaves the target alone."""
        source = tmp_path / "source-config"
        source.write_text("kind: Config\nclusters: []\n")

        with patch("k8s_report.cli.main.find_kubeconfig", return_value=source):
            result = runner.invoke(app, ["retrieve-kubeconfig"], input="n\n")

        assert result.exit_code == 0
        assert "Operation cancelled" in result.output
        assert kubeconfig_file.read_text() != source.read_text()

    def test_force_overwrites(self, clean_env, tmp_path, kubeconfig_file):
        """Test --force overwrites without asking."""
        source = tmp_path / "source-config"
        source.write_text("kind: Config\nclusters: []\n")

        with patch("k8s_report.cli.main.find_kubeconfig", return_value=source), patch(
            "k8s_report.cli.main.check_cluster_access", return_value=False
        ):
            result = runner.invoke(app, ["retrieve-kubeconfig", "--force"])

        assert result.exit_code == 0
        assert kubeconfig_file.read_text() == source.read_text()

    def test_nothing_found(self, clean_env):
        """Test exit code 1 when no kubeconfig exists."""
        with patch("k8s_report.cli.main.find_kubeconfig", return_value=None):
            result = runner.invoke(app, ["retrieve-kubeconfig"])

        assert result.exit_code == 1
        assert "No valid kubeconfig file found" in result.output


class TestVersionCommand:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "k8s-report" in result.output
