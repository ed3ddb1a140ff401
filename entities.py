# entities.py

# re‑export every entity record and its helpers

from entities_utils import (
    Rect,
    rect_intersect,
    center_of,
    ship_polygon
)

from entities_player import Player

from entities_bullet import (
    Bullet,
    player_bullet,
    enemy_bullet
)

from entities_enemy import (
    Enemy,
    generate_enemies,
    resample_enemies,
    relayout_enemies
)

from entities_particle import (
    Particle,
    create_explosion,
    update_particles
)

from entities_targets import (
    PageTarget,
    TargetHandle,
    scan_targets
)
