"""Document configuration.

Metadata for the ``info`` block, the paths the document and its UI are
mounted at, and how registration treats unknown methods. Host settings
in the nested ``swagger`` layout load through ``OpenAPIConfig.from_mapping``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ContactInfo:
    """Contact block of the document's ``info`` section."""

    name: str = ""
    url: str = ""
    email: str = ""


@dataclass(frozen=True, slots=True)
class LicenseInfo:
    """License block of the document's ``info`` section."""

    name: str = ""
    url: str = ""


@dataclass(frozen=True, slots=True)
class OpenAPIConfig:
    """Document configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = OpenAPIConfig(title="Users API", version="2.0.0")
    """

    # Top-level metadata (owned by the host application)
    openapi_version: str = "3.0.1"
    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str = ""
    contact: ContactInfo | None = None
    license: LicenseInfo | None = None

    # Where the external renderer serves the document
    mount_path: str = "/docs"

    # Raise on unsupported HTTP methods instead of logging and dropping the route
    strict_methods: bool = True

    # Field metadata keys read by the schema registry
    encoding_key: str = "json"
    validation_key: str = "binding"

    @property
    def json_path(self) -> str:
        """Path of the machine-readable document, ``<mount>.json``."""
        return f"{self._mount_base}.json"

    @property
    def ui_path(self) -> str:
        """Wildcard path of the browsable UI, ``<mount>/*``."""
        return f"{self._mount_base}/*"

    @property
    def _mount_base(self) -> str:
        return self.mount_path.rstrip("/")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], **overrides: Any) -> OpenAPIConfig:
        """Build a config from a nested settings mapping.

        Accepts either the ``swagger`` section itself or a mapping that
        contains it::

            OpenAPIConfig.from_mapping({
                "swagger": {
                    "openapi_version": "3.0.1",
                    "info": {
                        "title": "Users API",
                        "contact": {"name": "Ops", "email": "ops@example.com"},
                        "license": {"name": "MIT"},
                    },
                },
            })

        Missing keys fall back to the dataclass defaults. Contact and
        license blocks are only set when present and non-empty.
        Keyword *overrides* win over anything read from *data*.
        """
        section = data.get("swagger", data)
        info = section.get("info") or {}
        defaults = cls()

        contact = None
        contact_data = info.get("contact")
        if contact_data:
            contact = ContactInfo(
                name=contact_data.get("name", ""),
                url=contact_data.get("url", ""),
                email=contact_data.get("email", ""),
            )

        license_ = None
        license_data = info.get("license")
        if license_data:
            license_ = LicenseInfo(
                name=license_data.get("name", ""),
                url=license_data.get("url", ""),
            )

        values: dict[str, Any] = {
            "openapi_version": section.get("openapi_version", defaults.openapi_version),
            "title": info.get("title", defaults.title),
            "version": info.get("version", defaults.version),
            "description": info.get("description", defaults.description),
            "contact": contact,
            "license": license_,
            "mount_path": section.get("mount_path", defaults.mount_path),
            "strict_methods": section.get("strict_methods", defaults.strict_methods),
        }
        values.update(overrides)
        return cls(**values)
