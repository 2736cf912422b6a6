"""Pydantic models for application configuration. Central contract for IDE and validation."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from user_registry.domain.sorting import SortDescriptor


# --- Store ---

StoreBackend = Literal["memory", "firestore"]


class StoreConfig(BaseModel):
    """Where user records live."""

    backend: StoreBackend = Field(default="memory", description="memory | firestore")
    base_url: str = Field(default="https://firestore.googleapis.com")
    project_id: str | None = Field(default=None, description="Required for the firestore backend")
    database: str = Field(default="(default)")
    collection: str = Field(default="users", min_length=1)
    timeout: float = Field(default=30.0, gt=0)

    @model_validator(mode="after")
    def _firestore_needs_project(self) -> StoreConfig:
        if self.backend == "firestore" and not self.project_id:
            raise ValueError("store.project_id is required for the firestore backend")
        return self


# --- Form ---


class FormConfig(BaseModel):
    reset_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Delay between an accepted submit and clearing the form",
    )


# --- List view ---


class ListViewConfig(BaseModel):
    default_sort: SortDescriptor = Field(default_factory=SortDescriptor)
    keep_dialog_open_on_delete_failure: bool = Field(
        default=False,
        description="Leave the delete confirmation open after a failed delete",
    )


# --- Messages ---


class MessagesConfig(BaseModel):
    """User-facing notification texts."""

    validation_failed: str = "Por favor corrija los errores en el formulario"
    load_failed: str = "No se pudieron cargar los usuarios"
    save_failed: str = "No se pudo guardar la información"
    created_title: str = "Registro exitoso"
    created: str = "Los datos han sido guardados correctamente"
    updated_title: str = "Actualización exitosa"
    updated: str = "Los datos han sido actualizados correctamente"
    deleted_title: str = "Usuario eliminado"
    deleted: str = "El usuario ha sido eliminado correctamente"
    delete_failed: str = "No se pudo eliminar el usuario"


# --- Top-level app config ---


class AppConfig(BaseModel):
    """Full application configuration loaded from YAML."""

    name: str = Field(default="Registro de Usuarios", description="Display name")
    store: StoreConfig = Field(default_factory=StoreConfig)
    form: FormConfig = Field(default_factory=FormConfig)
    list_view: ListViewConfig = Field(default_factory=ListViewConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
