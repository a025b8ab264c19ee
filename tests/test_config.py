"""Tests for AppConfig and the kida environment it drives."""

from pathlib import Path

import pytest

from wicket.config import AppConfig
from wicket.templating import create_environment


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.static_dir == "static"
        assert config.static_url == "/static"
        assert config.expose_tracebacks is True
        assert config.access_log is True
        assert config.max_content_length == 16 * 1024 * 1024

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(AttributeError):
            config.port = 9000  # type: ignore[misc]

    def test_overrides(self) -> None:
        config = AppConfig(port=3000, static_dir=None, expose_tracebacks=False)
        assert config.port == 3000
        assert config.static_dir is None
        assert config.expose_tracebacks is False


class TestCreateEnvironment:
    def test_loads_from_template_dir(self, tmp_path: Path) -> None:
        (tmp_path / "page.html").write_text("{{ title }}")
        env = create_environment(AppConfig(template_dir=tmp_path))
        assert env.get_template("page.html").render({"title": "Home"}) == "Home"
