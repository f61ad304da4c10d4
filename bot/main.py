"""
Module: bot/main.py

Entry point for the quote bot.
Registers commands, starts the minute scheduler once connected, and defines
event handlers for bot lifecycle, disconnection, reconnection, and command logging.
"""
import traceback

import nextcord
from colorama import Fore, Style
from config import DISCORD_BOT_TOKEN, GUILD_IDS, GUILD_MODE, DISCORD_APPLICATION_ID
from utils import log_message, report_command_error
from bot_context import bot, quotes, store, scheduler, frases_group

# Import command modules to register slash commands
import commands.phrase
import commands.add
import commands.list
import commands.delete
import commands.help

@bot.event
async def on_ready():
    """
    Handler for the bot's ready event.

    Logs bot identity, starts the scheduler, and syncs slash commands.
    """
    log_message(f'Logged in as {bot.user.name} ({bot.user.id})', "info")
    log_message(f"{len(quotes)} quotes loaded, {len(store)} users with schedules", "info")
    scheduler.start()

    if GUILD_MODE:
        for guild_id in GUILD_IDS:
            guild = bot.get_guild(guild_id)
            guild_name = guild.name if guild else str(guild_id)
            try:
                await bot.sync_application_commands(guild_id=guild_id)
                log_message(f"Synced commands to guild {guild_name} ({guild_id})", "info")
            except nextcord.errors.Forbidden:
                log_message(
                    f"Failed to sync commands for guild {guild_name} ({guild_id}): Missing Access", "warning"
                )
            except Exception as e:
                log_message(
                    f"Error syncing commands for guild {guild_name} ({guild_id}): {e}", "error"
                )

    perms = nextcord.Permissions()
    perms.send_messages = True
    perms.view_channel = True

    invite_url = nextcord.utils.oauth_url(
        client_id=DISCORD_APPLICATION_ID,
        permissions=perms,
        scopes=["bot", "applications.commands"]
    )
    print(f"{Fore.CYAN}Bot invite URL: {Fore.YELLOW}{invite_url}{Style.RESET_ALL}")

@bot.event
async def on_application_command_error(interaction, error):
    """
    Handler for errors during slash command execution.

    Logs the error and notifies the user of an internal failure.
    """
    log_message(f"Slash command error: {error}", "error")
    await report_command_error(interaction)

@bot.event
async def on_error(event_method, *args, **kwargs):
    """
    Catch-all handler for unhandled errors in any event.

    Logs the event method name and full traceback when an error occurs.
    """
    tb = traceback.format_exc()
    log_message(f"Unhandled error in event {event_method}: {tb}", "error")

@bot.event
async def on_disconnect():
    """
    Handler for bot disconnection.

    Pauses the scheduler; schedules stay in the store and the file.
    """
    log_message("Bot disconnected from Discord, pausing notifications.", "warning")
    await scheduler.stop()

@bot.event
async def on_resumed():
    """
    Handler for bot reconnection after a disconnect.
    """
    log_message("Bot resumed connection, restarting scheduler.", "info")
    scheduler.start()

@bot.listen()
async def on_interaction(interaction: nextcord.Interaction):
    """
    Listener for all `/frases` slash command interactions.

    Reconstructs the raw command with argument names and values and logs it
    along with the invoking user for easy replay.
    """
    try:
        if interaction.type != nextcord.InteractionType.application_command:
            return
        data = interaction.data
        if data.get('name') != 'frases':
            return
        cmd = f"/{data['name']}"
        for opt in data.get('options', []):
            cmd += f" {opt['name']}"
            for subopt in opt.get('options', []):
                cmd += f" {subopt['name']}:{subopt['value']}"
        log_message(
            f"Slash command invoked: {cmd} | User: {interaction.user.name} ({interaction.user.id})",
            "info"
        )
    except Exception as e:
        log_message(f"Error in on_interaction: {e}", "error")

# Bot startup
log_message("Bot is starting up...")
bot.add_application_command(frases_group)
bot.run(DISCORD_BOT_TOKEN)
