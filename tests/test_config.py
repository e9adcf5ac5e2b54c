"""Tests for routedoc.config — OpenAPIConfig frozen dataclass."""

import pytest

from routedoc.config import ContactInfo, LicenseInfo, OpenAPIConfig


class TestOpenAPIConfig:
    def test_defaults(self) -> None:
        cfg = OpenAPIConfig()

        assert cfg.openapi_version == "3.0.1"
        assert cfg.title == "API Documentation"
        assert cfg.version == "1.0.0"
        assert cfg.description == ""
        assert cfg.contact is None
        assert cfg.license is None
        assert cfg.mount_path == "/docs"
        assert cfg.strict_methods is True
        assert cfg.encoding_key == "json"
        assert cfg.validation_key == "binding"

    def test_frozen(self) -> None:
        cfg = OpenAPIConfig()

        with pytest.raises(AttributeError):
            cfg.title = "Other"  # type: ignore[misc]

    def test_mount_paths(self) -> None:
        cfg = OpenAPIConfig(mount_path="/swagger")

        assert cfg.json_path == "/swagger.json"
        assert cfg.ui_path == "/swagger/*"

    def test_mount_path_trailing_slash(self) -> None:
        cfg = OpenAPIConfig(mount_path="/swagger/")

        assert cfg.json_path == "/swagger.json"
        assert cfg.ui_path == "/swagger/*"


class TestFromMapping:
    def test_empty_uses_defaults(self) -> None:
        assert OpenAPIConfig.from_mapping({}) == OpenAPIConfig()

    def test_swagger_section(self) -> None:
        cfg = OpenAPIConfig.from_mapping(
            {
                "swagger": {
                    "openapi_version": "3.1.0",
                    "info": {
                        "version": "2.0.0",
                        "title": "Users API",
                        "description": "Manage users",
                        "contact": {
                            "name": "Ops",
                            "url": "https://example.com",
                            "email": "ops@example.com",
                        },
                        "license": {"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
                    },
                },
            }
        )

        assert cfg.openapi_version == "3.1.0"
        assert cfg.version == "2.0.0"
        assert cfg.title == "Users API"
        assert cfg.description == "Manage users"
        assert cfg.contact == ContactInfo("Ops", "https://example.com", "ops@example.com")
        assert cfg.license == LicenseInfo("MIT", "https://opensource.org/licenses/MIT")

    def test_bare_section(self) -> None:
        cfg = OpenAPIConfig.from_mapping({"info": {"title": "Bare"}, "strict_methods": False})

        assert cfg.title == "Bare"
        assert cfg.strict_methods is False

    def test_empty_contact_ignored(self) -> None:
        cfg = OpenAPIConfig.from_mapping({"swagger": {"info": {"contact": {}, "license": None}}})

        assert cfg.contact is None
        assert cfg.license is None

    def test_keyword_overrides_win(self) -> None:
        cfg = OpenAPIConfig.from_mapping({"swagger": {"info": {"title": "A"}}}, title="B")

        assert cfg.title == "B"
