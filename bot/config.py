import os
from dotenv import load_dotenv
from utils import set_log_level

load_dotenv()

RAW_GUILD_IDS = os.getenv("GUILD_IDS", "")
GUILD_IDS = [int(gid.strip()) for gid in RAW_GUILD_IDS.split(",") if gid.strip().isdigit()]
GUILD_MODE = bool(GUILD_IDS)

DISCORD_BOT_TOKEN = os.getenv('DISCORD_BOT_TOKEN')
DISCORD_APPLICATION_ID = os.getenv('DISCORD_APPLICATION_ID')

if not DISCORD_BOT_TOKEN or not DISCORD_APPLICATION_ID:
    raise EnvironmentError("Missing DISCORD_BOT_TOKEN or DISCORD_APPLICATION_ID in .env file")

# Backing files
PHRASES_FILE = os.getenv("PHRASES_FILE", "frases.json")
SCHEDULES_FILE = os.getenv("SCHEDULES_FILE", "user_schedules.json")

LOG_LEVEL = os.getenv("LOG_LEVEL", "info")
set_log_level(LOG_LEVEL)
