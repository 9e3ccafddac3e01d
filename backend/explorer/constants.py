"""
Tuning constants shared by the simulation engines.

All values are PER TICK (the host loop targets ~60 ticks/s). Nothing here is
scaled by elapsed time, so changing the tick rate changes how the game feels.
"""

# Ship handling (solar + arcade)
SHIP_ACCELERATION = 0.2
SHIP_FRICTION = 0.98      # idle drag in solar mode, for playability
MAX_SPEED = 8.0           # hard clamp is 1.5x this

# Initial body table: (name, color, radius, orbit_radius, orbit_speed)
# A "fun" scale solar system - not astronomically accurate.
INITIAL_BODIES = [
    ("Sun", "#FDB813", 60, 0, 0.0),
    ("Mercury", "#A5A5A5", 8, 140, 0.02),
    ("Venus", "#E3BB76", 12, 220, 0.015),
    ("Earth", "#22A6B3", 13, 320, 0.01),
    ("Mars", "#EB4D4B", 10, 420, 0.008),
    ("Ceres", "#8c8c8c", 4, 520, 0.007),     # inside the asteroid belt
    ("Jupiter", "#D980FA", 35, 680, 0.004),
    ("Saturn", "#F7D794", 30, 950, 0.003),
    ("Uranus", "#7ED6DF", 20, 1200, 0.002),
    ("Neptune", "#30336B", 19, 1400, 0.0015),
    ("Pluto", "#D4A373", 5, 1600, 0.0012),
    ("Haumea", "#EEEEEE", 5, 1800, 0.001),
    ("Makemake", "#BC6C25", 5, 2000, 0.0009),
    ("Eris", "#F4F4F9", 6, 2200, 0.0008),
]

# Decorative asteroid belt (solar mode)
BELT_INNER_RADIUS = 480.0
BELT_OUTER_RADIUS = 600.0
BELT_ASTEROID_COUNT = 300

# Orbit sandbox
CENTRAL_MASS = 1800.0
CRASH_RADIUS = 45.0
ESCAPE_RADIUS = 5000.0

# Arcade asteroid tiers: tier -> (size, speed, score)
ASTEROID_TIERS = {
    3: (40.0, 1.0, 20),
    2: (20.0, 2.0, 50),
    1: (10.0, 3.0, 100),
}

# Raiden enemy table: type -> (hp, width, height, vy, |vx|, score)
RAIDEN_ENEMIES = {
    "scout": (1, 30.0, 30.0, 5.0, 0.0, 10),
    "interceptor": (2, 30.0, 30.0, 2.5, 2.0, 20),
    "heavy": (5, 50.0, 50.0, 1.0, 0.0, 50),
}
