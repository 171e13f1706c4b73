"""
どこで: `common` の型定義。
何を: Vec2 / RGBA8 などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

Vec2 = tuple[float, float]
# 0..255 の非乗算 sRGBA
RGBA8 = tuple[int, int, int, int]


__all__ = ["Vec2", "RGBA8"]
