# planegame

A small arcade plane shooter. You fly a bomber at the bottom of the screen
and shoot at an enemy plane that appears near the top.

The game draws to a virtual screen of 224×256 pixels. The virtual screen is
scaled into the window and letterboxed to keep its aspect ratio.

## Installation

```
pip install .
```

This also installs `pygame`, which the game needs.

## Running

```
planegame
```

You can also run `python -m planegame.main`. Either one opens an 800×600
window titled "A Plane Game" and starts at the main menu.

Assets are loaded from an `assets/` directory relative to the current
working directory:

- `assets/bomber_one.png` is the sprite for the player, the enemy and the bullets.
- `assets/fonts/Lander.ttf` and `assets/fonts/Lander Bold.ttf` are the menu fonts.

If a file is missing, loading it raises `FileNotFoundError`.

The log is printed to standard output and also written to `runtime.log` in
the working directory. To get a debug build, set the environment variable
`PLANEGAME_DEBUG`, for example `PLANEGAME_DEBUG=1`. A debug build does three
things:

- It logs every level, including trace.
- It writes the log file synchronously.
- It draws the resolution and FPS on top of the picture.

## Controls

| Key                  | Action                                |
|----------------------|---------------------------------------|
| Enter                | Leave the main menu and start playing |
| Arrow keys / W A S D | Move the plane                        |
| Space                | Fire                                  |
| Escape               | Close the window                      |

Player bullets damage the enemy, and the enemy is removed when its health
reaches zero. Each enemy bullet that hits the player costs one life. When no
lives are left, the player's plane is removed.

## What the game does not do (yet)

- Only one enemy is spawned, when the game scene loads. It neither moves nor
  fires. `planegame.systems.bullet_system.spawn_enemy_bullet` exists, but
  nothing calls it.
- There is no game-over screen and no score display. Losing the last life
  only removes the plane.
- `Window.toggle_fullscreen` exists but is not bound to any key.

## Using the engine

`planegame.engine.Engine` can run a game of your own:

1. Subclass `planegame.engine.GameBase`.
2. Implement `load`, `unload`, `update`, `fixed_update`, `async_update` and `draw`.
3. Call `Engine().start(width, height, title, game)`.

The engine calls the game's methods as follows:

- `update` and `draw` run once per frame on the main thread. The frame rate is capped at 60 FPS.
- `fixed_update` runs in steps of 0.02 s on its own thread. Time the thread has not yet used is capped at 0.25 s.
- `async_update` is queued each frame for a pool of four worker threads. The queue holds at most 1000 tasks, and `Engine.queue_async_task` returns `False` when it is full.

Two functions in `planegame.engine` control reporting:

- `set_profiling_enabled(enabled, frames_before_profiling)` turns the profiler in `planegame.profiler` on or off.
- `set_frame_stats_enabled(enabled)` turns the periodic frame-time report on or off.

Other building blocks:

- **Scenes.** `planegame.game` keeps a stack of `planegame.scenes.scene.Scene` objects. Use `add_scene`, `remove_top_scene` and `switch_scene` to change it, and `scenes()` to read it. A locking scene stops updates from reaching the scenes below it. A transparent scene stops drawing below it.
- **Systems.** `planegame.systems.system_manager.SystemManager` runs systems registered per `UpdateType`, in the order they were added.
- **Entities.** Entities and their components live in a `planegame.components.Registry`. `Registry.view(*types)` yields `(entity, *components)` tuples.
- **Drawing.** `planegame.renderer.Renderer` draws onto a pygame surface. It draws immediately, or queues draw commands between `begin_batch` and `end_batch`.
- **Assets.** `planegame.assets.AssetManager` loads textures, sprite sheets, tile sets and fonts per scene. `remove_scene_textures` releases everything a scene owns.

## Tests

```
pip install .[test]
pytest
```