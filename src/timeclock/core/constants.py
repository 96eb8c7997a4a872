"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_BREAK_MINUTES = 20

DEFAULT_LOCAL_TIMEZONE = "America/Sao_Paulo"
DEFAULT_POINTS_TAB_NAME = "Pontos"

# Columns A..J of the points worksheet; row 1 holds the header.
SHEET_COLUMNS = (
    "timestamp",
    "local_time",
    "user_id",
    "user_name",
    "user_role",
    "event_type",
    "latitude",
    "longitude",
    "evidence_ref",
    "note",
)
SHEET_DATA_RANGE = "A2:J"

# Column F labels written by the first release of the points worksheet.
LEGACY_EVENT_TYPE_LABELS = {
    "entrada": "clock_in",
    "inicio_descanso": "break_start",
    "fim_descanso": "break_end",
    "saida": "clock_out",
}
