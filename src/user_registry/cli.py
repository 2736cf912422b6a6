"""Interactive CLI for the user registry."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from user_registry.config.loader import load_config
from user_registry.domain.record import FIELD_NAMES, EducationLevel
from user_registry.infrastructure.user_store import build_store
from user_registry.orchestration.page import RegistrationPage

LABELS = {
    "first_name": "Nombre",
    "last_name": "Apellido Paterno",
    "mother_last_name": "Apellido Materno",
    "birth_date": "Fecha de Nacimiento (AAAA-MM-DD)",
    "curp": "CURP",
    "phone": "Teléfono",
    "email": "Correo Electrónico",
    "education": "Nivel de Estudios (" + ", ".join(e.value for e in EducationLevel) + ")",
}

COLUMNS = ("last_name", "mother_last_name", "first_name", "curp", "birth_date", "phone", "email", "education")

HELP = "Commands: list | sort <column> [asc|desc] | add | edit <id> | delete <id> | quit"


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="User registry interactive demo")
    p.add_argument("--config", "-c", required=True, help="Path to app YAML config")
    p.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    return p.parse_args()


def print_notifications(page: RegistrationPage) -> None:
    for n in page.drain_notifications():
        print(f"[{n.color}] {n.title}: {n.description}")


def print_users(page: RegistrationPage) -> None:
    users = page.user_list.sorted_users
    if not users:
        print("No hay usuarios registrados")
        return
    for u in users:
        print(u.id, " | ".join(getattr(u, c) for c in COLUMNS))


def fill_form(page: RegistrationPage) -> None:
    """Ask for every field until its visible error clears. Enter keeps the current value."""
    for field in FIELD_NAMES:
        current = getattr(page.form.state.draft, field)
        while True:
            hint = f" [{current}]" if current else ""
            value = input(f"{LABELS[field]}{hint}: ")
            error = page.form.change(field, value or current)
            if not error:
                break
            print(f"  {error}")


async def add_or_edit(page: RegistrationPage) -> None:
    fill_form(page)
    await page.submit_form()
    print_notifications(page)
    if page.preview is None:
        return
    print(page.preview.render())
    answer = input(f"{page.preview.confirm_label}? [y/N] ").strip().lower()
    if answer == "y":
        await page.confirm()
    else:
        page.close_preview()


def find_user(page: RegistrationPage, user_id: str):
    return next((u for u in page.users if u.id == user_id), None)


async def run_interactive(page: RegistrationPage) -> None:
    await page.load_users()
    print(HELP)
    while True:
        print_notifications(page)
        try:
            line = input("> ").strip()
        except EOFError:
            break
        if not line:
            continue
        cmd, *args = line.split()
        cmd = cmd.lower()
        if cmd in ("quit", "exit", "q"):
            break
        if cmd == "list":
            print_users(page)
        elif cmd == "sort" and args:
            direction = "descending" if args[1:] == ["desc"] else "ascending"
            try:
                page.user_list.set_sort(args[0], direction)
            except ValueError as e:
                print(f"Error: {e}")
                continue
            print_users(page)
        elif cmd == "add":
            page.cancel_edit()
            await add_or_edit(page)
        elif cmd in ("edit", "delete") and args:
            user = find_user(page, args[0])
            if user is None:
                print(f"Unknown id: {args[0]}")
                continue
            if cmd == "edit":
                page.start_edit(user)
                await add_or_edit(page)
            else:
                dialog = page.user_list.request_delete(user)
                answer = input(f"¿Eliminar al usuario {dialog.name}? [y/N] ").strip().lower()
                if answer == "y":
                    await page.user_list.confirm_delete()
                else:
                    page.user_list.cancel_delete()
        else:
            print(HELP)


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    api_key = os.environ.get("FIRESTORE_API_KEY", "")
    store = build_store(config.store, api_key=api_key or None)
    page = RegistrationPage(config, store)

    asyncio.run(run_interactive(page))
    return 0


if __name__ == "__main__":
    sys.exit(main())
