# tests/test_game_service.py
from app.services.game_service import GameService


def make_world(saves, name, marker="level.dat"):
    world = saves / name
    world.mkdir(parents=True)
    (world / marker).write_bytes(b"")


def test_nested_game_dir_is_found(tmp_path):
    game_dir = tmp_path / ".minecraft"
    game_dir.mkdir()
    (game_dir / "options.txt").write_text("renderDistance:8\n", encoding="utf-8")

    info = GameService().inspect_game_dir(tmp_path)

    assert info.is_valid
    assert info.game_dir == game_dir
    assert info.options_path == game_dir / "options.txt"


def test_worlds_are_listed_sorted(tmp_path):
    saves = tmp_path / "saves"
    make_world(saves, "zeta")
    make_world(saves, "Alpha")
    make_world(saves, "beta", marker="session.lock")
    (saves / "not a world").mkdir()

    info = GameService().inspect_game_dir(tmp_path)

    assert info.is_valid
    assert info.worlds == ["Alpha", "beta", "zeta"]


def test_empty_or_missing_dir_is_invalid(tmp_path):
    service = GameService()
    assert not service.inspect_game_dir(tmp_path).is_valid
    assert not service.inspect_game_dir(tmp_path / "missing").is_valid
