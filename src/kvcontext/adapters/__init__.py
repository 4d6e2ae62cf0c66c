from .factory import build_exporter, build_exporters
from .json_export import JsonExporter
from .log_sinks import JsonlLogSink, StreamLogSink
from .text_sinks import FileTextSink, StdoutTextSink
from .toml_export import TomlExporter
from .tree import TreeSerializer
from .xml_export import XmlExporter
from .yaml_export import YamlExporter

# Public adapter exports are optional but make wiring simpler.
__all__ = [
    "FileTextSink",
    "JsonExporter",
    "JsonlLogSink",
    "StdoutTextSink",
    "StreamLogSink",
    "TomlExporter",
    "TreeSerializer",
    "XmlExporter",
    "YamlExporter",
    "build_exporter",
    "build_exporters",
]
