"""Performance series and forecast tables behind the analytics and prediction views."""

# timeframe -> [(label, profitability, efficiency)]
PERFORMANCE_SERIES = {
    "daily": [
        ("Day 1", 80, 75),
        ("Day 2", 78, 72),
        ("Day 3", 82, 76),
        ("Day 4", 85, 79),
        ("Day 5", 84, 80),
        ("Day 6", 87, 82),
        ("Day 7", 90, 85),
    ],
    "weekly": [
        ("Week 1", 82, 77),
        ("Week 2", 84, 79),
        ("Week 3", 86, 81),
        ("Week 4", 89, 83),
    ],
    "monthly": [
        ("Jan", 81, 76),
        ("Feb", 83, 78),
        ("Mar", 85, 80),
        ("Apr", 87, 82),
        ("May", 89, 84),
        ("Jun", 90, 86),
    ],
}

DEFAULT_TIMEFRAME = "daily"

# (label, actual, predicted)
MODEL_PERFORMANCE = [
    ("Week 1", 82, 80),
    ("Week 2", 85, 83),
    ("Week 3", 78, 76),
    ("Week 4", 80, 82),
    ("Week 5", 88, 86),
    ("Week 6", 92, 90),
    ("Week 7", 86, 87),
]

MODEL_METRICS = [
    ("Model Type", "LSTM + Ensemble"),
    ("Accuracy", "94.3%"),
    ("RMSE", "0.072"),
    ("Last Updated", "Today, 14:30"),
]

FEATURE_IMPORTANCE = [
    ("Load Factor", 0.93),
    ("Fuel Price", 0.87),
    ("Route Demand", 0.82),
    ("Seasonal Factors", 0.76),
    ("Competition", 0.65),
]

# Monthly profit in USD; trends are "up" or "down".
ROUTE_FORECASTS = [
    {"id": 1, "from": "DEL", "to": "BOM", "current": 14850,
     "forecast30": 16200, "trend30": "up", "forecast90": 18500, "trend90": "up", "confidence": 92},
    {"id": 2, "from": "BLR", "to": "HYD", "current": 9320,
     "forecast30": 10500, "trend30": "up", "forecast90": 12200, "trend90": "up", "confidence": 88},
    {"id": 3, "from": "DEL", "to": "CCU", "current": -2150,
     "forecast30": -3200, "trend30": "down", "forecast90": 1800, "trend90": "up", "confidence": 76},
    {"id": 4, "from": "BOM", "to": "GOI", "current": 7200,
     "forecast30": 7800, "trend30": "up", "forecast90": 8500, "trend90": "up", "confidence": 85},
    {"id": 5, "from": "BLR", "to": "COK", "current": 5300,
     "forecast30": 4800, "trend30": "down", "forecast90": 6200, "trend90": "up", "confidence": 78},
]
