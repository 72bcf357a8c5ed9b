"""Activities and expression functions for data-driven integration flows."""

__version__ = "0.1.0"

__all__ = [
    "activity",
    "appdata",
    "arrays",
    "channel",
    "coerce",
    "counter",
    "dates",
    "host_activities",
    "json_path",
    "number",
    "rest",
    "rest_metadata",
    "sqldb",
    "sqlquery",
    "sqlstatement",
    "text_edit",
    "text_query",
    "utils",
    "xml2json",
]