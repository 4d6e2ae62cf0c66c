from .cli import build_parser, parse_args, parse_assignment, run

__all__ = ["build_parser", "parse_args", "parse_assignment", "run"]
