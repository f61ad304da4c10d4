"""
Module: bot/commands/add.py

Defines the `/frases agendar` slash command, letting a user register a daily
or weekday-bound time at which a random phrase is sent to them.
"""
import nextcord
from bot_context import store, frases_group
from errors import ValidationError, PersistenceError
from store import normalize_time
from utils import log_message, DAYS_OF_WEEK

@frases_group.subcommand(
    name="agendar",
    description="Agendar o envio diário ou semanal de uma frase"
)
async def add_schedule(
    interaction: nextcord.Interaction,
    hora: str = nextcord.SlashOption(
        description="Horário no formato HH:MM (24h)", required=True
    ),
    dia: str = nextcord.SlashOption(
        description="Dia da semana (omita para todos os dias)",
        required=False,
        choices=list(DAYS_OF_WEEK)
    )
):
    """
    Handle `/frases agendar`.

    Parameters:
    - interaction: Interaction context.
    - hora: Time of day, "H:MM" or "HH:MM".
    - dia: Optional weekday abbreviation; omitted means every day.
    """
    try:
        rule = store.add_rule(interaction.user.id, dia, normalize_time(hora))
    except ValidationError:
        return await interaction.response.send_message(
            "Uso correto: /frases agendar HH:MM [DIA]. Onde DIA é a abreviação do dia "
            "da semana (dom, seg, ter, qua, qui, sex, sab).",
            ephemeral=True
        )
    except PersistenceError:
        return await interaction.response.send_message(
            "Erro ao salvar o agendamento. 😔", ephemeral=True
        )

    log_message(
        f"User {interaction.user.name} ({interaction.user.id}) scheduled {rule.describe()}",
        "info"
    )
    await interaction.response.send_message(
        "Agendamento salvo com sucesso! 🎉 Para ver seus agendamentos, use o comando /frases listar.",
        ephemeral=True
    )
