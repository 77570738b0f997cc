from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple

Position = Tuple[int, int]


class SpriteCache:
    """Caches tile textures and keeps one sprite per occupied board cell."""

    def __init__(self, texture_dir: Path):
        self._texture_dir = Path(texture_dir)
        self._texture_cache: dict[str, Any] = {}
        self._missing: set[str] = set()
        self._tile_sprite_map: dict[Position, Any] = {}
        self._tile_sprites: Any | None = None

    @property
    def texture_dir(self) -> Path:
        return self._texture_dir

    def get_tile_texture(self, arcade_module, identifier: str | None):
        """Texture for a catalog identifier, or None when the file is unavailable."""
        if not identifier or identifier in self._missing:
            return None
        cached = self._texture_cache.get(identifier)
        if cached is not None:
            return cached
        texture_path = self._texture_dir / identifier
        if not texture_path.exists():
            self._missing.add(identifier)
            return None
        try:
            texture = arcade_module.load_texture(str(texture_path))
        except Exception:
            self._missing.add(identifier)
            return None
        self._texture_cache[identifier] = texture
        return texture

    def ensure_tile_sprite(self, arcade_module, pos: Position, identifier: str | None):
        texture = self.get_tile_texture(arcade_module, identifier)
        if texture is None:
            self.remove_tile_sprite(pos)
            return None
        tile_list = self._tile_sprites
        if tile_list is None:
            tile_list = arcade_module.SpriteList()
            self._tile_sprites = tile_list
        sprite = self._tile_sprite_map.get(pos)
        if sprite is None:
            sprite = arcade_module.Sprite()
            self._tile_sprite_map[pos] = sprite
            tile_list.append(sprite)
        if getattr(sprite, "_tile_identifier", None) != identifier:
            sprite.texture = texture
            sprite._tile_identifier = identifier  # type: ignore[attr-defined]
        return sprite

    def remove_tile_sprite(self, pos: Position) -> None:
        sprite = self._tile_sprite_map.pop(pos, None)
        if sprite is not None:
            sprite.remove_from_sprite_lists()

    def cleanup_tile_sprites(self, active: set[Position]) -> None:
        stale = [pos for pos in self._tile_sprite_map if pos not in active]
        for pos in stale:
            self.remove_tile_sprite(pos)

    def draw_tile_sprites(self) -> None:
        if self._tile_sprites is not None:
            self._tile_sprites.draw()

    @staticmethod
    def update_sprite_visuals(sprite, center_x: float, center_y: float, icon_size: float) -> None:
        sprite.center_x = center_x
        sprite.center_y = center_y
        texture = sprite.texture
        if texture and texture.width and texture.height:
            max_dim = max(texture.width, texture.height)
            if max_dim:
                sprite.scale = icon_size / max_dim
