"""Reference route tables: ranked routes, network views and competitor shares."""

# (id, origin, destination, efficiency %)
TOP_ROUTES = [
    (1, "DEL", "BOM", 92.8),
    (2, "BLR", "HYD", 89.5),
    (3, "CCU", "MAA", 87.2),
    (4, "DEL", "GOI", 86.1),
    (5, "BOM", "COK", 85.3),
    (6, "DEL", "BLR", 84.7),
    (7, "BOM", "MAA", 83.9),
    (8, "DEL", "HYD", 83.2),
    (9, "BLR", "GOI", 82.5),
    (10, "DEL", "IXC", 81.8),
]

# Route metric per network view, as (origin, destination, value, volume).
# The value is a profitability fraction, load factor or on-time share
# depending on the view.
NETWORK_ROUTES = {
    "profitability": [
        ("DEL", "BOM", 0.92, 9),
        ("BLR", "HYD", 0.89, 7),
        ("CCU", "MAA", 0.87, 6),
        ("DEL", "GOI", 0.86, 5),
        ("DEL", "CCU", -0.2, 4),
        ("BOM", "BLR", 0.4, 6),
    ],
    "loadFactor": [
        ("DEL", "BOM", 0.88, 9),
        ("BLR", "HYD", 0.92, 8),
        ("CCU", "MAA", 0.85, 7),
        ("DEL", "GOI", 0.90, 6),
        ("DEL", "CCU", 0.75, 5),
        ("BOM", "BLR", 0.82, 7),
    ],
    "delays": [
        ("DEL", "BOM", 0.95, 9),
        ("BLR", "HYD", 0.97, 8),
        ("CCU", "MAA", 0.80, 7),
        ("DEL", "GOI", 0.75, 6),
        ("DEL", "CCU", 0.65, 5),
        ("BOM", "BLR", 0.85, 7),
    ],
}

COMPETITIVE_ROUTES = [
    {
        "from": "DEL",
        "to": "BOM",
        "profitability": 0.92,
        "volume": 9,
        "competitors": [
            ("AirIndia", 0.45, 0.85),
            ("IndiGo", 0.30, 0.90),
            ("Vistara", 0.15, 0.80),
        ],
    },
    {
        "from": "BLR",
        "to": "HYD",
        "profitability": 0.89,
        "volume": 7,
        "competitors": [
            ("IndiGo", 0.55, 0.88),
            ("SpiceJet", 0.25, 0.75),
        ],
    },
    {
        "from": "DEL",
        "to": "LHR",
        "profitability": 0.78,
        "volume": 10,
        "competitors": [
            ("AirIndia", 0.35, 0.76),
            ("BritishAirways", 0.40, 0.82),
            ("Lufthansa", 0.15, 0.88),
        ],
    },
    {
        "from": "BOM",
        "to": "DXB",
        "profitability": 0.86,
        "volume": 8,
        "competitors": [
            ("Emirates", 0.50, 0.92),
            ("AirIndia", 0.20, 0.75),
        ],
    },
    {
        "from": "DEL",
        "to": "SIN",
        "profitability": 0.75,
        "volume": 6,
        "competitors": [
            ("SingaporeAir", 0.45, 0.94),
            ("IndiGo", 0.25, 0.82),
            ("AirIndia", 0.20, 0.70),
        ],
    },
    {
        "from": "JFK",
        "to": "LHR",
        "profitability": 0.95,
        "volume": 10,
        "competitors": [
            ("BritishAirways", 0.30, 0.88),
            ("Delta", 0.25, 0.85),
            ("UnitedAir", 0.20, 0.82),
            ("AmericanAir", 0.15, 0.78),
        ],
    },
]
