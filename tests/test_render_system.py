import pytest

from tilelink.components.board import Board
from tilelink.events.bus import EventBus
from tilelink.systems.board_ops import get_tile_catalog
from tilelink.systems.match import MatchSystem
from tilelink.systems.render import RenderSystem
from tilelink.world import create_world


class DummyWindow:
    width = 800
    height = 600


@pytest.fixture
def setup_world():
    def build(rows, removal_delay=0.0):
        bus = EventBus()
        world = create_world(board=Board.from_rows(rows))
        match = MatchSystem(world, bus, removal_delay=removal_delay)
        render = RenderSystem(world, bus, DummyWindow())
        return bus, world, match, render
    return build


def test_selection_tracks_controller(setup_world):
    bus, world, match, render = setup_world([[1, 2, 1], [2, 0, 0]])
    match.select((0, 0))
    assert render.selected == (0, 0)
    match.select((0, 1))
    assert render.selected is None


def test_route_visible_until_tiles_removed(setup_world):
    bus, world, match, render = setup_world([[1, 0, 1], [2, 0, 2]], removal_delay=0.5)
    match.select((0, 0))
    outcome = match.select((0, 2))
    assert render.route == outcome.route
    assert render.selected is None
    match.flush()
    assert render.route is None


def test_hint_marks_a_connectable_pair(setup_world):
    bus, world, match, render = setup_world([[1, 2, 0], [0, 2, 1]])
    assert render.show_hint()
    assert {render.hint_a, render.hint_b} in ({(0, 1), (1, 1)}, {(0, 0), (1, 2)})


def test_hint_cleared_on_stalemate_and_after_shuffle(setup_world):
    bus, world, match, render = setup_world([[1, 2], [2, 1]])
    assert not render.show_hint()
    assert render.hint_a is None and render.hint_b is None

    bus2, world2, match2, render2 = setup_world([[3, 3]])
    assert render2.show_hint()
    match2.shuffle()
    assert render2.hint_a is None


def test_headless_process_records_tile_centres(setup_world):
    bus, world, match, render = setup_world([[1] * 8 for _ in range(8)])
    render.process()
    assert render._last_tile_layout[(0, 0)] == (211, 489)
    assert len(render._last_tile_layout) == 64


class FakeTexture:
    def __init__(self, path):
        self.path = path
        self.width = 100
        self.height = 50


class FakeSprite:
    def __init__(self):
        self.texture = None
        self.lists = []

    def remove_from_sprite_lists(self):
        for sprite_list in self.lists:
            sprite_list.remove(self)
        self.lists = []


class FakeSpriteList(list):
    def append(self, sprite):
        super().append(sprite)
        sprite.lists.append(self)


class FakeArcade:
    Sprite = FakeSprite
    SpriteList = FakeSpriteList

    def __init__(self):
        self.loaded = []

    def load_texture(self, path):
        self.loaded.append(path)
        return FakeTexture(path)


def test_tile_textures_resolve_through_catalog(tmp_path):
    (tmp_path / "warplet1.png").write_bytes(b"png")
    bus = EventBus()
    world = create_world(board=Board.from_rows([[1, 2]]), tile_images=["warplet1.png", "warplet2.png"])
    render = RenderSystem(world, bus, DummyWindow(), texture_dir=tmp_path)
    catalog = get_tile_catalog(world)
    fake = FakeArcade()

    sprite = render.sprite_cache.ensure_tile_sprite(fake, (0, 0), catalog.identifier_for(1))
    assert sprite is not None
    assert sprite.texture.path == str(tmp_path / "warplet1.png")
    assert render.sprite_cache.ensure_tile_sprite(fake, (0, 1), catalog.identifier_for(2)) is None
    assert render.sprite_cache.ensure_tile_sprite(fake, (0, 1), catalog.identifier_for(3)) is None

    # Textures load once and are shared between cells.
    render.sprite_cache.ensure_tile_sprite(fake, (1, 0), catalog.identifier_for(1))
    assert len(fake.loaded) == 1

    render.sprite_cache.update_sprite_visuals(sprite, 10, 20, 50)
    assert (sprite.center_x, sprite.center_y, sprite.scale) == (10, 20, 0.5)

    render.sprite_cache.cleanup_tile_sprites({(1, 0)})
    assert sprite.lists == []
