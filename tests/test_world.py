import pytest

from monsters.world import Block, World, is_solid

SMALL = dict(tile_size=4, tiles_x=12, tiles_y=12)


@pytest.fixture
def world():
    return World(**SMALL)


def test_generation_is_deterministic(world):
    assert World(**SMALL).tiles == world.tiles


def test_every_tile_is_a_known_block(world):
    allowed = {Block.GROUND, Block.TREE, Block.LEAVES, Block.CAVE}
    assert len(world.tiles) == world.tiles_x * world.tiles_y
    assert set(world.tiles) <= allowed


def test_cave_is_a_five_by_five_square(world):
    cave = [
        (tx, ty)
        for ty in range(world.tiles_y)
        for tx in range(world.tiles_x)
        if world.tile_at(tx, ty) == Block.CAVE
    ]
    assert len(cave) >= 25
    left = min(x for x, _ in cave)
    top = min(y for _, y in cave)
    for dy in range(5):
        for dx in range(5):
            assert world.tile_at(left + dx, top + dy) == Block.CAVE


def test_dimensions(world):
    assert world.width == 12 * 4
    assert world.height == 12 * 4


def test_pixel_matches_tile(world):
    for y in range(0, world.height, 3):
        for x in range(0, world.width, 5):
            assert world.pixel(x, y) == world.tile_at(x // 4, y // 4)


def test_too_small_world_cannot_place_cave():
    with pytest.raises(ValueError):
        World(tile_size=4, tiles_x=8, tiles_y=12)


def test_set_pixel_overrides_only_that_pixel(world):
    before = world.pixel(1, 0)
    world.set_pixel(0, 0, Block.DIAMOND)
    assert world.pixel(0, 0) == Block.DIAMOND
    assert world.pixel(1, 0) == before


def test_aligned_fill_replaces_tile_and_edits(world):
    world.set_pixel(5, 5, Block.DIAMOND)
    world.fill_tile(4, 4, Block.GROUND)
    assert world.tile_at(1, 1) == Block.GROUND
    assert all(world.pixel(x, y) == Block.GROUND for x in range(4, 8) for y in range(4, 8))


def test_unaligned_fill_spans_tiles(world):
    world.fill_tile(2, 2, Block.DIAMOND)
    assert world.pixel(2, 2) == Block.DIAMOND
    assert world.pixel(5, 5) == Block.DIAMOND
    assert world.pixel(6, 6) == world.tile_at(1, 1)
    assert world.tile_at(0, 0) != Block.DIAMOND or world.pixel(0, 0) == Block.DIAMOND


def test_out_of_range_access_raises(world):
    with pytest.raises(IndexError):
        world.pixel(world.width, 0)
    with pytest.raises(IndexError):
        world.fill_tile(world.width - 2, 0, Block.GROUND)
    with pytest.raises(IndexError):
        world.tile_at(-1, 0)


@pytest.mark.parametrize(
    "color, solid",
    [
        (Block.TREE, True),
        (Block.LEAVES, True),
        (Block.DIAMOND, True),
        (-16777216, True),
        (Block.GROUND, False),
        (Block.CAVE, False),
    ],
)
def test_is_solid(color, solid):
    assert is_solid(color) is solid