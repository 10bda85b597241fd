"""Tests for the administrator bootstrap command."""

import pytest

from ferryapp.scripts import create_admin


class TestCreateAdmin:

    def test_parse_args(self):
        args = create_admin.parse_args(
            ["--rif-cedula", "V-1", "--usuario", "admin", "--contrasena", "adminpass1"]
        )

        assert args.rif_cedula == "V-1"
        assert args.usuario == "admin"
        assert args.contrasena == "adminpass1"

    def test_missing_identity_key_exits(self):
        with pytest.raises(SystemExit):
            create_admin.parse_args(["--usuario", "admin"])

    def test_main_reports_kernel_errors(self, monkeypatch, capsys):
        async def fake_create_admin(identity_key, login_name, password):
            from ferryapp.kernel.errors import Conflict
            raise Conflict("El nombre de usuario ya existe")

        monkeypatch.setattr(create_admin, "create_admin", fake_create_admin)

        code = create_admin.main(
            ["--rif-cedula", "V-1", "--usuario", "admin", "--contrasena", "adminpass1"]
        )

        assert code == 1
        assert "El nombre de usuario ya existe" in capsys.readouterr().err

    def test_main_success(self, monkeypatch, capsys):
        async def fake_create_admin(identity_key, login_name, password):
            return identity_key

        monkeypatch.setattr(create_admin, "create_admin", fake_create_admin)

        code = create_admin.main(
            ["--rif-cedula", "V-1", "--usuario", "admin", "--contrasena", "adminpass1"]
        )

        assert code == 0
        assert "V-1" in capsys.readouterr().out
