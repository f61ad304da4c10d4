"""
Module: bot/commands/help.py

Provides the `/frases ajuda` slash command for displaying usage information
for the phrase and scheduling commands.
"""
import nextcord
from utils import log_message
from bot_context import frases_group

HELP_DATA = {
    None: {
        "title": "📚 Ajuda",
        "description": "Comandos disponíveis:",
        "fields": [
            ("/frases frase", "Receber uma frase aleatória agora"),
            ("/frases agendar <HH:MM> [dia]", "Receber uma frase todo dia, ou só no dia escolhido"),
            ("/frases listar", "Listar seus agendamentos numerados"),
            ("/frases excluir <número>", "Excluir um agendamento"),
            ("/frases excluir_todos", "Excluir todos os seus agendamentos"),
            ("/frases ajuda [comando]", "Ajuda de um comando")
        ]
    },
    "agendar": {
        "title": "➕ Ajuda: agendar",
        "description": "Agendar o envio de uma frase por mensagem direta",
        "example": "/frases agendar 07:30 seg",
        "details": (
            "Parâmetros:\n"
            "- hora: horário local no formato HH:MM (24h).\n"
            "- dia (opcional): dom, seg, ter, qua, qui, sex ou sab.\n\n"
            "Sem dia, a frase é enviada todos os dias no horário escolhido."
        )
    },
    "listar": {
        "title": "📋 Ajuda: listar",
        "description": "Listar seus agendamentos",
        "example": "/frases listar",
        "details": "Mostra o número, o dia e a hora de cada agendamento."
    },
    "excluir": {
        "title": "❌ Ajuda: excluir",
        "description": "Excluir um agendamento",
        "example": "/frases excluir 2",
        "details": (
            "Exclui o agendamento com o número mostrado em /frases listar.\n"
            "Os agendamentos seguintes passam a ter o número anterior."
        )
    }
}

@frases_group.subcommand(name="ajuda", description="Ajuda com os comandos")
async def show_help(
    interaction: nextcord.Interaction,
    comando: str = nextcord.SlashOption(
        description="Comando para ajuda detalhada",
        required=False,
        choices=[name for name in HELP_DATA if name]
    )
):
    """
    Display help information.

    Without arguments, lists all commands. With a command name ("agendar",
    "listar", "excluir"), shows an example and parameter descriptions.
    """
    if comando and comando not in HELP_DATA:
        await interaction.response.send_message(f"❌ Comando desconhecido: {comando}", ephemeral=True)
        return

    data = HELP_DATA[comando] if comando else HELP_DATA[None]
    embed = nextcord.Embed(
        title=data["title"],
        description=data["description"],
        color=nextcord.Color.green()
    )

    if comando and "example" in data:
        embed.add_field(name="📝 Exemplo", value=data["example"], inline=False)
        embed.add_field(name="ℹ️ Detalhes", value=data["details"], inline=False)
    else:
        for name, value in data.get("fields", []):
            embed.add_field(name=name, value=value, inline=False)

    log_message(
        f"User {interaction.user.name} ({interaction.user.id}) accessed help: {comando or 'general'}",
        "info"
    )
    await interaction.response.send_message(embed=embed, ephemeral=True)
