"""
Create an administrator account from the command line.

Every registration route needs an administrator token, so the first one
has to be created here:

    python -m ferryapp.scripts.create_admin --rif-cedula V-1 --usuario admin
"""

import argparse
import asyncio
import getpass
import sys
from typing import Optional, Sequence

from ferryapp.database import async_session_maker, close_db, init_db
from ferryapp.kernel.errors import IdentityError
from ferryapp.kernel.identity.registration import RegistrationCoordinator
from ferryapp.logging_config import configure_logging


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an administrator account.")
    parser.add_argument("--rif-cedula", required=True, help="Identity key of the administrator")
    parser.add_argument("--usuario", required=True, help="Login name")
    parser.add_argument(
        "--contrasena",
        help="Password (prompted when omitted)",
    )
    return parser.parse_args(argv)


async def create_admin(identity_key: str, login_name: str, password: str) -> str:
    await init_db()
    try:
        async with async_session_maker() as session:
            return await RegistrationCoordinator(session).register_administrator(
                identity_key=identity_key,
                login_name=login_name,
                plaintext_password=password,
            )
    finally:
        await close_db()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging()
    password = args.contrasena
    if not password:
        password = getpass.getpass("Contraseña: ")
        if password != getpass.getpass("Confirmar contraseña: "):
            print("Error: las contraseñas no coinciden", file=sys.stderr)
            return 1

    try:
        identity_key = asyncio.run(create_admin(args.rif_cedula, args.usuario, password))
    except IdentityError as exc:
        print(f"Error: {exc.client_message}", file=sys.stderr)
        return 1

    print(f"Administrador {identity_key} creado")
    return 0


if __name__ == "__main__":
    sys.exit(main())
