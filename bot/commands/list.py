"""
Module: bot/commands/list.py

Defines the `/frases listar` slash command, showing the caller's schedules
numbered by the index used for `/frases excluir`.
"""
import nextcord
from bot_context import store, frases_group
from utils import log_message

@frases_group.subcommand(name="listar", description="Listar seus agendamentos")
async def list_schedules(interaction: nextcord.Interaction):
    """
    List the caller's rules, numbered by the index used for deletion.
    """
    rules = store.list_rules(interaction.user.id)
    if not rules:
        await interaction.response.send_message(
            "Você não tem nenhum agendamento ativo. 😔", ephemeral=True
        )
        return

    lines = ["📅 Seus agendamentos:"]
    lines += [f"{index}. {rule.describe()}" for index, rule in enumerate(rules, start=1)]
    log_message(
        f"User {interaction.user.name} ({interaction.user.id}) listed {len(rules)} schedules",
        "debug"
    )
    await interaction.response.send_message("\n".join(lines), ephemeral=True)
