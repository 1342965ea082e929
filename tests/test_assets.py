"""Tests for logo asset resolution."""

from pathlib import Path

from invoicekit.rendering.assets import (
    DEFAULT_LOGO_CANDIDATES,
    FileAssetResolver,
    StaticAssetResolver,
)


def test_static_resolver():
    """Test fixed bytes or nothing."""
    assert StaticAssetResolver(b"png").resolve_logo() == b"png"
    assert StaticAssetResolver().resolve_logo() is None


def test_first_existing_candidate_wins(tmp_path):
    """Test candidates are tried in order."""
    second = tmp_path / "second.png"
    third = tmp_path / "third.png"
    second.write_bytes(b"second")
    third.write_bytes(b"third")

    resolver = FileAssetResolver([tmp_path / "missing.png", second, third])

    assert resolver.resolve_logo() == b"second"


def test_no_candidate_found(tmp_path):
    """Test absence of a logo is not an error."""
    resolver = FileAssetResolver([tmp_path / "a.png", tmp_path / "b.jpg"])

    assert resolver.resolve_logo() is None


def test_directory_is_not_a_logo(tmp_path):
    """Test a directory candidate is skipped."""
    assert FileAssetResolver([tmp_path]).resolve_logo() is None


def test_from_environment_order(tmp_path, monkeypatch):
    """Test explicit path, then INVOICEKIT_LOGO_PATH, then the defaults."""
    env_logo = tmp_path / "env.png"
    monkeypatch.setenv("INVOICEKIT_LOGO_PATH", str(env_logo))

    resolver = FileAssetResolver.from_environment(extra=tmp_path / "cli.png")

    assert resolver.candidates[0] == tmp_path / "cli.png"
    assert resolver.candidates[1] == env_logo
    assert resolver.candidates[2:] == [Path(c) for c in DEFAULT_LOGO_CANDIDATES]


def test_from_environment_without_overrides(monkeypatch):
    """Test only the defaults are used without overrides."""
    monkeypatch.delenv("INVOICEKIT_LOGO_PATH", raising=False)

    resolver = FileAssetResolver.from_environment()

    assert resolver.candidates == [Path(c) for c in DEFAULT_LOGO_CANDIDATES]
