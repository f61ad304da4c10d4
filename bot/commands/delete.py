"""
Module: bot/commands/delete.py

Defines `/frases excluir` to remove one schedule by its listed number and
`/frases excluir_todos` to remove every schedule of the caller after an
ephemeral confirmation prompt.
"""
import nextcord
from nextcord import ui, ButtonStyle
from bot_context import store, frases_group
from errors import NotFoundError, NoOpError, PersistenceError
from utils import log_message

class DeleteAllConfirmView(ui.View):
    """
    View for delete-all confirmation with Confirm and Cancel buttons.

    Attributes:
        user_id (int): ID of the user permitted to interact.
        confirmed (bool): Whether the user has confirmed the action.
    """
    def __init__(self, user_id: int):
        super().__init__(timeout=30)
        self.user_id = user_id
        self.confirmed = False

    @ui.button(label="Confirmar", style=ButtonStyle.danger)
    async def confirm(self, _, interaction: nextcord.Interaction):
        if interaction.user.id != self.user_id:
            return await interaction.response.send_message("Não autorizado.", ephemeral=True)
        self.confirmed = True
        self.stop()
        await interaction.response.edit_message(content="Excluindo agendamentos...", view=None)

    @ui.button(label="Cancelar", style=ButtonStyle.secondary)
    async def cancel(self, _, interaction: nextcord.Interaction):
        if interaction.user.id != self.user_id:
            return await interaction.response.send_message("Não autorizado.", ephemeral=True)
        self.stop()
        await interaction.response.edit_message(content="Exclusão cancelada.", view=None)

@frases_group.subcommand(name="excluir", description="Excluir um agendamento pelo número")
async def delete_schedule(
    interaction: nextcord.Interaction,
    numero: int = nextcord.SlashOption(
        description="Número do agendamento (veja /frases listar)", required=True
    )
):
    """
    Handle `/frases excluir`. Numbers after the removed one shift down by one.
    """
    try:
        rule = store.remove_rule(interaction.user.id, numero)
    except NotFoundError:
        return await interaction.response.send_message(
            "Agendamento não encontrado ou número inválido. Verifique o número do "
            "agendamento com /frases listar e tente novamente.",
            ephemeral=True
        )
    except PersistenceError:
        return await interaction.response.send_message(
            "Erro ao excluir o agendamento. 😔", ephemeral=True
        )

    log_message(
        f"User {interaction.user.name} ({interaction.user.id}) deleted schedule {numero} ({rule.describe()})",
        "info"
    )
    await interaction.response.send_message("Agendamento excluído com sucesso! 🎉", ephemeral=True)

@frases_group.subcommand(name="excluir_todos", description="Excluir todos os seus agendamentos")
async def delete_all_schedules(interaction: nextcord.Interaction):
    """
    Handle `/frases excluir_todos`. Deletion only happens after Confirm is pressed.
    """
    if not store.list_rules(interaction.user.id):
        return await interaction.response.send_message(
            "Você não tem nenhum agendamento ativo para excluir. 😔", ephemeral=True
        )

    view = DeleteAllConfirmView(interaction.user.id)
    await interaction.response.send_message(
        "Tem certeza de que deseja excluir *todos* os seus agendamentos?", view=view, ephemeral=True
    )
    await view.wait()
    if not view.confirmed:
        return

    try:
        count = store.remove_all(interaction.user.id)
    except NoOpError:
        return await interaction.edit_original_message(
            content="Você não tem nenhum agendamento ativo para excluir. 😔", view=None
        )
    except PersistenceError:
        return await interaction.edit_original_message(
            content="Erro ao excluir os agendamentos. 😔", view=None
        )

    log_message(f"User {interaction.user.name} ({interaction.user.id}) deleted all {count} schedules", "info")
    await interaction.edit_original_message(
        content="Todos os seus agendamentos foram excluídos com sucesso! 🎉", view=None
    )
