"""
Module: bot/utils.py

Provides utility functions for logging, the weekday abbreviation table,
parsing of user-supplied day and time tokens, and slash command error replies.
"""
import inspect, os, re
from datetime import datetime, UTC
import nextcord
from colorama import init, Fore, Style

init(autoreset=True)

LOG_LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}
_min_level = LOG_LEVELS.get(os.getenv("LOG_LEVEL", "info").lower(), 20)

# Sunday-first weekday convention: 0=dom ... 6=sab
DAYS_OF_WEEK = {
    "dom": 0,
    "seg": 1,
    "ter": 2,
    "qua": 3,
    "qui": 4,
    "sex": 5,
    "sab": 6
}

ANY_DAY_LABEL = "Todos os dias"

TIME_PATTERN = re.compile(r'([01][0-9]|2[0-3]):[0-5][0-9]')


def set_log_level(level):
    """
    Change the minimum level printed by log_message.

    Unknown level names leave the current threshold unchanged.
    """
    global _min_level
    _min_level = LOG_LEVELS.get(str(level).lower(), _min_level)


def log_message(message, level="info"):
    """
    Print a timestamped, colored log message with the caller's relative source path.

    Parameters:
    - message: The log message string.
    - level: One of "info", "debug", "warning", or "error" for coloring.
    """
    if LOG_LEVELS.get(level.lower(), 20) < _min_level:
        return

    frame    = inspect.currentframe().f_back
    fullpath = frame.f_code.co_filename
    cwd      = os.getcwd()
    if fullpath.startswith(cwd + os.sep):
        filename = fullpath[len(cwd)+1:]
    else:
        filename = fullpath
    lineno   = frame.f_lineno

    timestamp = datetime.now(UTC).strftime('%Y-%m-%d %H:%M:%S')
    color_map = {
        "info": Fore.GREEN,
        "debug": Fore.BLUE,
        "warning": Fore.YELLOW,
        "error": Fore.RED
    }
    level_prefix = f"{level.upper():<7}"
    level_color = color_map.get(level.lower(), Fore.WHITE)

    prefix = f"[{timestamp}] {filename}({lineno}):"
    print(f"{prefix} {level_color}{level_prefix} {message}{Style.RESET_ALL}")


def is_canonical_time(value):
    """
    Return True when value is exactly "HH:MM" in 24-hour form.
    """
    return isinstance(value, str) and bool(TIME_PATTERN.fullmatch(value))


def parse_time(time_str):
    """
    Normalize a user-supplied time into canonical "HH:MM".

    Accepts "H:MM" or "HH:MM" (surrounding whitespace ignored).
    Returns the canonical string, or None if the input is not a valid time.
    """
    if not time_str:
        return None
    match = re.fullmatch(r'([0-9]{1,2}):([0-9]{2})', time_str.strip())
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def parse_day(day_str):
    """
    Resolve a weekday abbreviation to its integer (0=Sunday).

    Returns None for an empty value (meaning "any day").
    Raises KeyError for an unknown abbreviation.
    """
    if day_str is None or not str(day_str).strip():
        return None
    return DAYS_OF_WEEK[str(day_str).strip().lower()]


def day_label(day):
    """
    Human label for a stored day value: its abbreviation, or "Todos os dias" for any day.
    """
    if day is None:
        return ANY_DAY_LABEL
    for abbrev, number in DAYS_OF_WEEK.items():
        if number == day:
            return abbrev
    return str(day)


def weekday_number(when):
    """
    Day-of-week of a datetime using the Sunday=0 convention.
    """
    return when.isoweekday() % 7


async def report_command_error(interaction):
    """
    Tell the user a slash command failed.

    Uses a followup when the handler already responded, since a second
    send_message on the same interaction raises InteractionResponded.
    """
    try:
        if interaction.response.is_done():
            await interaction.followup.send("❌ Ocorreu um erro interno.", ephemeral=True)
        else:
            await interaction.response.send_message("❌ Ocorreu um erro interno.", ephemeral=True)
    except (nextcord.HTTPException, nextcord.ClientException) as e:
        log_message(f"Could not report command error to user: {e}", "warning")
