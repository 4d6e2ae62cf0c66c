from .exporter import Exporter
from .log_sink import LogSink
from .serializer import Serializer
from .text_sink import TextSink

# Public port exports keep wiring explicit at composition time.
__all__ = ["Exporter", "LogSink", "Serializer", "TextSink"]
