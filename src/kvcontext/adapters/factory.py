from __future__ import annotations

from kvcontext.adapters.json_export import JsonExporter
from kvcontext.adapters.toml_export import TomlExporter
from kvcontext.adapters.xml_export import XmlExporter
from kvcontext.adapters.yaml_export import YamlExporter
from kvcontext.config.models import ExportSettings
from kvcontext.domain.formats import ExportFormat
from kvcontext.ports.exporter import Exporter

_EXPORTERS = {
    ExportFormat.JSON: JsonExporter,
    ExportFormat.TOML: TomlExporter,
    ExportFormat.YAML: YamlExporter,
    ExportFormat.XML: XmlExporter,
}


def build_exporter(fmt: ExportFormat, settings: ExportSettings) -> Exporter:
    # Factory for a single format adapter, regardless of gating.
    return _EXPORTERS[fmt](settings)


def build_exporters(settings: ExportSettings) -> dict[ExportFormat, Exporter]:
    # Only formats enabled by configuration get an adapter; the rest stay absent.
    return {fmt: build_exporter(fmt, settings) for fmt in ExportFormat if settings.is_enabled(fmt)}
