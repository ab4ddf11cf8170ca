"""Tests for CLI output helpers."""

import pytest

from pluginlist import cli_logger


class TestMarkupEscaping:
    """Registry text is printed as-is, never parsed as rich markup."""

    @pytest.mark.parametrize(
        "printer",
        [
            pytest.param(cli_logger.success, id="success"),
            pytest.param(cli_logger.error, id="error"),
            pytest.param(cli_logger.info, id="info"),
            pytest.param(cli_logger.dim, id="dim"),
        ],
    )
    @pytest.mark.parametrize(
        "message",
        [
            pytest.param("x[/dim]", id="stray-closing-tag"),
            pytest.param("[/red] not a url", id="leading-closing-tag"),
            pytest.param("[bold]plugin[/bold]", id="balanced-tags"),
        ],
    )
    def test_brackets_are_printed_literally(
        self, printer: object, message: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify markup-like text neither raises nor gets styled away."""
        # When
        printer(message)  # type: ignore[operator]

        # Then
        assert message in capsys.readouterr().out

    def test_prefixes_are_still_styled(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Verify only the message is escaped, not the prefix markup."""
        cli_logger.error("boom")

        output = capsys.readouterr().out
        assert "✗ boom" in output
        assert "[red]" not in output
