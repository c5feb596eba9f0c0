"""
Constants shared by the service and API layers.
"""

# Youngest age (in whole years) a player may be registered with
MIN_PLAYER_AGE = 15

# Display values for players without a club or contract
FREE_AGENT_LABEL = "Free Agent"

# Dashboard match lists
DASHBOARD_MATCH_LIMIT = 5

# Default stadiums seeded on first startup: (name, city)
DEFAULT_STADIUMS = [
    ("Old Trafford", "Manchester"),
    ("Anfield", "Liverpool"),
    ("Santiago Bernabeu", "Madrid"),
    ("Camp Nou", "Barcelona"),
    ("Allianz Arena", "Munich"),
    ("San Siro", "Milan"),
    ("Parc des Princes", "Paris"),
    ("Signal Iduna Park", "Dortmund"),
]
