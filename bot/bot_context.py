"""
Module: bot/bot_context.py

Sets up the Discord bot, the quote and schedule stores, and the scheduler, and
defines the main slash command group `/frases`.
"""
import nextcord
from nextcord.ext import commands

from quotes import QuoteStore
from store import ScheduleStore
from scheduler.manager import QuoteScheduler
from config import GUILD_IDS, GUILD_MODE, PHRASES_FILE, SCHEDULES_FILE

class QuoteBot(commands.Bot):
    """
    Bot that stops its scheduler before closing the Discord connection.
    """
    scheduler = None

    async def close(self):
        if self.scheduler is not None:
            await self.scheduler.stop()
        await super().close()


intents = nextcord.Intents.default()
bot = QuoteBot(intents=intents)

quotes = QuoteStore(PHRASES_FILE)
quotes.load()
store = ScheduleStore(SCHEDULES_FILE)
store.load()


async def send_direct_message(user_id, text):
    """
    Notifier used by the scheduler: deliver text to the user as a Discord DM.

    Raises whatever nextcord raises; the scheduler's dispatch task logs it.
    """
    user = bot.get_user(int(user_id)) or await bot.fetch_user(int(user_id))
    await user.send(text)


scheduler = QuoteScheduler(store, quotes, send_direct_message)
bot.scheduler = scheduler


@bot.slash_command(
    name="frases",
    description="Frases aleatórias e agendamentos",
    guild_ids=GUILD_IDS if GUILD_MODE else None
)
async def frases_group(interaction: nextcord.Interaction):
    """
    Main command group for the quote bot.
    Subcommands: inicio, frase, agendar, listar, excluir, excluir_todos, sair, ajuda.
    This command itself is not directly invoked.
    """
    pass
