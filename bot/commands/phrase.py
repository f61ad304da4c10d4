"""
Module: bot/commands/phrase.py

Defines `/frases inicio`, `/frases frase` and `/frases sair`.
"""
import nextcord
from bot_context import quotes, frases_group
from utils import log_message

@frases_group.subcommand(name="inicio", description="Boas-vindas e lista de comandos")
async def welcome(interaction: nextcord.Interaction):
    await interaction.response.send_message(
        f"Olá {interaction.user.display_name}, seja bem-vindo(a) ao bot de frases! 😊✨\n\n"
        "Comandos: /frases frase, /frases agendar, /frases listar, /frases excluir, "
        "/frases excluir_todos, /frases sair, /frases ajuda",
        ephemeral=True
    )

@frases_group.subcommand(name="frase", description="Receber uma frase aleatória agora")
async def random_phrase(interaction: nextcord.Interaction):
    """
    Reply with a random phrase, or the "no phrases" message when none are loaded.
    """
    phrase = quotes.phrase()
    log_message(f"User {interaction.user.name} ({interaction.user.id}) requested a phrase", "debug")
    await interaction.response.send_message(f"✅😊 {phrase} ❤️👍")

@frases_group.subcommand(name="sair", description="Encerrar a conversa")
async def goodbye(interaction: nextcord.Interaction):
    await interaction.response.send_message(
        "Obrigado por utilizar o bot de frases! 😄✨ Sempre que precisar, estaremos aqui. Até breve! ❤️",
        ephemeral=True
    )
