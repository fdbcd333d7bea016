"""Game logic toolkit: platformer physics, particle emitters, Life, Snake and angle helpers."""

__version__ = "0.1.0"
__all__ = ["angles", "emitter", "geometry", "life", "particle_config", "platformer", "snake"]