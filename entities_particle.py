# entities_particle.py

import math
import random
from dataclasses import dataclass

from config import DEFAULT_EXPLOSION_SIZE, EXPLOSION_PARTICLES, PARTICLE_LIFE


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: tuple
    size: float

    def update(self, dt):
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.life -= dt

    @property
    def alpha(self):
        """Opacity in [0, 1] scaled by remaining lifetime."""
        return max(0.0, min(1.0, self.life / PARTICLE_LIFE))


def create_explosion(particles, x, y, color, size=DEFAULT_EXPLOSION_SIZE, rng=random):
    """Append a radial burst centred on (x, y); spread grows with ``size``."""
    max_speed = size * 5
    for _ in range(EXPLOSION_PARTICLES):
        angle = rng.random() * math.pi * 2
        speed = rng.random() * max_speed
        particles.append(Particle(
            x=x,
            y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            life=PARTICLE_LIFE,
            color=color,
            size=rng.random() * 3 + 1,
        ))


def update_particles(particles, dt):
    """Advance every particle and return the survivors."""
    for p in particles:
        p.update(dt)
    return [p for p in particles if p.life > 0]
