"""Build the read-only confirmation preview of a draft."""

from __future__ import annotations

from pydantic import BaseModel

from user_registry.domain.record import UserData


class Preview(BaseModel):
    """What the confirmation step shows before a create or update."""

    title: str
    lines: list[tuple[str, str]]
    confirm_label: str
    user: UserData
    is_editing: bool = False

    def render(self) -> str:
        parts = [self.title, ""]
        parts.extend(f"{label}: {value}" for label, value in self.lines)
        return "\n".join(parts)


def build_preview(user: UserData, is_editing: bool = False) -> Preview:
    """Echo every field of the draft, labelled for display."""
    return Preview(
        title="Confirmar Actualización" if is_editing else "Confirmar Registro",
        lines=[
            ("Nombre completo", user.display_name),
            ("Fecha de nacimiento", user.birth_date),
            ("CURP", user.curp),
            ("Teléfono", user.phone),
            ("Correo", user.email),
            ("Nivel de estudios", user.education),
        ],
        confirm_label="Actualizar" if is_editing else "Confirmar",
        user=user.model_copy(),
        is_editing=is_editing,
    )
