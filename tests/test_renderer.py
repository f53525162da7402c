import pygame
import pytest

import planegame.log
from planegame.primitives import BLACK, BLUE, RED, WHITE, Rectangle, Vector2
from planegame.renderer import RectangleCommand, Renderer, get_renderer


@pytest.fixture(autouse=True)
def _isolated_log(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    yield
    planegame.log.shutdown()


@pytest.fixture
def target():
    surface = pygame.Surface((16, 16))
    surface.fill((0, 0, 0))
    return surface


@pytest.fixture
def renderer(target):
    return Renderer(target)


def _rgb(surface, point):
    return tuple(surface.get_at(point))[:3]


def _solid(size, color):
    surface = pygame.Surface(size)
    surface.fill(tuple(color))
    return surface


def test_draw_texture_with_tint(renderer, target):
    renderer.draw_texture(_solid((2, 2), WHITE), 3, 4, RED)
    assert renderer.commands == ()
    assert renderer.screen_size() == (16, 16)
    assert _rgb(target, (3, 4)) == (RED.r, RED.g, RED.b)
    assert _rgb(target, (2, 4)) == (0, 0, 0)


def test_draw_texture_v_truncates_position(renderer, target):
    renderer.draw_texture_v(_solid((1, 1), WHITE), Vector2(5.9, 1.2), WHITE)
    assert renderer.commands == ()
    assert renderer.batching is False
    assert _rgb(target, (5, 1)) == (255, 255, 255)
    assert _rgb(target, (6, 1)) == (0, 0, 0)


def test_texture_pro_negative_height_flips(renderer, target):
    texture = pygame.Surface((4, 4))
    texture.fill(tuple(RED)[:3], pygame.Rect(0, 0, 4, 2))
    texture.fill(tuple(BLUE)[:3], pygame.Rect(0, 2, 4, 2))
    renderer.draw_texture_pro(texture, Rectangle(0, 0, 4, -4), Rectangle(0, 0, 4, 4),
                              Vector2(), 0.0, WHITE)
    assert renderer.commands == ()
    assert _rgb(target, (0, 0)) == (BLUE.r, BLUE.g, BLUE.b)
    assert _rgb(target, (0, 3)) == (RED.r, RED.g, RED.b)


def test_texture_pro_scales_into_dest(renderer, target):
    renderer.draw_texture_pro(_solid((1, 1), WHITE), Rectangle(0, 0, 1, 1),
                              Rectangle(2, 2, 4, 4), Vector2(), 0.0, WHITE)
    assert renderer.commands == ()
    assert _rgb(target, (5, 5)) == (255, 255, 255)
    assert _rgb(target, (6, 6)) == (0, 0, 0)


def test_texture_rec_draws_part(renderer, target):
    texture = pygame.Surface((4, 1))
    texture.fill(tuple(RED)[:3], pygame.Rect(0, 0, 2, 1))
    texture.fill(tuple(BLUE)[:3], pygame.Rect(2, 0, 2, 1))
    renderer.draw_texture_rec(texture, Rectangle(2, 0, 2, 1), Vector2(0, 0), WHITE)
    assert renderer.commands == ()
    assert _rgb(target, (0, 0)) == (BLUE.r, BLUE.g, BLUE.b)
    assert _rgb(target, (2, 0)) == (0, 0, 0)


def test_rectangle_rotated_about_origin(renderer, target):
    renderer.draw_rectangle_pro(Rectangle(10, 10, 4, 2), Vector2(2, 1), 90.0, RED)
    assert renderer.commands == ()
    assert _rgb(target, (9, 8)) == (RED.r, RED.g, RED.b)
    assert _rgb(target, (12, 10)) == (0, 0, 0)


def test_rectangle_unrotated(renderer, target):
    renderer.draw_rectangle_pro(Rectangle(1, 1, 3, 3), Vector2(0, 0), 0.0, WHITE)
    assert renderer.commands == ()
    assert _rgb(target, (3, 3)) == (255, 255, 255)
    assert _rgb(target, (4, 4)) == (0, 0, 0)


def test_batching_defers_drawing(renderer, target):
    renderer.begin_batch()
    renderer.draw_rectangle_pro(Rectangle(0, 0, 2, 2), Vector2(), 0.0, WHITE)
    assert _rgb(target, (0, 0)) == (0, 0, 0)
    assert len(renderer.commands) == 1
    assert isinstance(renderer.commands[0], RectangleCommand)
    renderer.end_batch()
    assert _rgb(target, (0, 0)) == (255, 255, 255)
    assert renderer.commands == ()
    assert renderer.batching is False


def test_begin_batch_twice_keeps_queue(renderer):
    renderer.begin_batch()
    renderer.draw_rectangle_pro(Rectangle(0, 0, 2, 2), Vector2(), 0.0, WHITE)
    renderer.begin_batch()
    assert len(renderer.commands) == 1


def test_end_batch_without_batch_changes_nothing(renderer, target):
    renderer.end_batch()
    assert renderer.batching is False
    assert _rgb(target, (0, 0)) == (0, 0, 0)


def test_end_draw_flushes_batch(renderer, target):
    renderer.begin_batch()
    renderer.draw_texture(_solid((1, 1), WHITE), 7, 7, WHITE)
    renderer.end_draw()
    assert _rgb(target, (7, 7)) == (255, 255, 255)
    assert renderer.commands == ()


def test_shutdown_clears_queue(renderer):
    renderer.begin_batch()
    renderer.draw_texture(_solid((1, 1), WHITE), 0, 0, WHITE)
    renderer.shutdown()
    assert renderer.commands == ()


def test_clear_uses_background_color(renderer, target):
    renderer.clear()
    assert _rgb(target, (8, 8)) == (BLUE.r, BLUE.g, BLUE.b)
    renderer.background_color = RED
    renderer.clear()
    assert _rgb(target, (8, 8)) == (RED.r, RED.g, RED.b)


def test_target_context_switches_and_restores(renderer, target):
    other = pygame.Surface((5, 3))
    with renderer.target(other):
        assert renderer.screen_size() == (5, 3)
    assert renderer.screen_size() == target.get_size()


def test_no_surface_raises():
    with pytest.raises(RuntimeError):
        Renderer().clear()


def test_measure_text_grows_with_text(renderer):
    assert renderer.measure_text("", 20) == 0
    assert renderer.measure_text("WW", 20) > renderer.measure_text("W", 20)
    assert renderer.measure_text("W", 40) > renderer.measure_text("W", 20)


def test_pixel_perfect_text_draws(renderer):
    surface = pygame.Surface((40, 30))
    surface.fill((255, 255, 255))
    pygame.font.init()
    font = pygame.font.Font(None, 20)
    with renderer.target(surface):
        renderer.draw_text_pixel_perfect(font, "A", Vector2(2.4, 2.4), 20, 1.0, BLACK)
        assert renderer.screen_size() == (40, 30)
    assert renderer.commands == ()
    dark = [
        (x, y) for x in range(40) for y in range(30)
        if _rgb(surface, (x, y))[0] < 128
    ]
    assert len(dark) > 0


def test_transparent_text_leaves_target(renderer):
    surface = pygame.Surface((40, 30))
    surface.fill((255, 255, 255))
    pygame.font.init()
    font = pygame.font.Font(None, 20)
    with renderer.target(surface):
        renderer.draw_text_pixel_perfect(font, "A", Vector2(2, 2), 20, 1.0,
                                         BLACK.with_alpha(0))
    pixels = {_rgb(surface, (x, y)) for x in range(40) for y in range(30)}
    assert pixels == {(255, 255, 255)}


def test_draw_text_marks_target(renderer, target):
    renderer.draw_text("X", 0, 0, 14, WHITE)
    assert renderer.commands == ()
    assert renderer.batching is False
    assert renderer.measure_text("X", 14) > 0
    pixels = {_rgb(target, (x, y)) for x in range(16) for y in range(16)}
    assert (0, 0, 0) in pixels
    assert len(pixels) > 1


def test_draw_text_batched_is_queued(renderer, target):
    renderer.begin_batch()
    renderer.draw_text("X", 0, 0, 14, WHITE)
    assert len(renderer.commands) == 1
    pixels = {_rgb(target, (x, y)) for x in range(16) for y in range(16)}
    assert pixels == {(0, 0, 0)}
    renderer.end_batch()
    assert renderer.commands == ()


def test_get_renderer_is_shared():
    shared = get_renderer()
    assert shared is get_renderer()
    shared.begin_batch()
    shared.draw_rectangle_pro(Rectangle(0, 0, 2, 2), Vector2(), 0.0, WHITE)
    assert len(get_renderer().commands) == 1
    assert get_renderer().batching is True
    shared.shutdown()
    assert get_renderer().commands == ()
    shared.end_batch()
    assert get_renderer().batching is False