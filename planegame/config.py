"""Game-wide settings: resolutions, gameplay tuning and asset names."""

# Virtual resolution for pixel-perfect rendering
VIRTUAL_WIDTH = 224
VIRTUAL_HEIGHT = 256

# Screen resolution
GAME_WIDTH = 800
GAME_HEIGHT = 600

GAME_TITLE = "A Plane Game"

# Player
PLAYER_DEFAULT_LIVES = 3
PLAYER_MAX_LIVES = 4
PLAYER_DEFAULT_BULLETS = 2
PLAYER_DEFAULT_BULLET_DAMAGE = 10
PLAYER_DEFAULT_BULLET_SPEED = 10
PLAYER_DEFAULT_BULLET_SIZE = 1
PLAYER_MOVE_SPEED = 10.0
PLAYER_SPRITE_SIZE = 32

# Enemy
ENEMY_DEFAULT_HEALTH = 15
ENEMY_MOVE_SPEED = 5.0
ENEMY_SPRITE_SIZE = 24
ENEMY_BULLET_SPEED = 5
ENEMY_BULLET_DAMAGE = 5

# Bullets
BULLET_BASE_WIDTH = 3.0
BULLET_BASE_HEIGHT = 5.0

# UI
UI_MAIN_MENU_FONT_SIZE = 7
UI_DEFAULT_FONT_SIZE = 14

# Engine
ENGINE_FIXED_TIME_STEP = 0.02
ENGINE_MAX_QUEUED_TASKS = 1000

# Common assets
FONT_LANDER = "fonts/Lander.ttf"
FONT_LANDER_BOLD = "fonts/Lander Bold.ttf"