from typelint.reporting.formatters import format_json, format_sarif, format_text

__all__ = ["format_json", "format_sarif", "format_text"]
