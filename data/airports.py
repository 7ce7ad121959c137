"""Reference airport catalog.

Each entry carries real coordinates (used for geodesic route distances) and
two sets of abstract map coordinates: ``network_position`` for the flat
network map and ``globe_position`` for the rotating competitive map. Airports
that only appear in route tables have no map coordinates.
"""

AIRPORTS = [
    {
        "code": "DEL",
        "name": "Delhi",
        "city": "Delhi",
        "country": "India",
        "latitude": 28.5562,
        "longitude": 77.1000,
        "network_position": (-3, 1, 0),
        "globe_position": (-5, 1, 3),
        "traffic": 8,
    },
    {
        "code": "BOM",
        "name": "Mumbai",
        "city": "Mumbai",
        "country": "India",
        "latitude": 19.0896,
        "longitude": 72.8656,
        "network_position": (-1, -2, 0),
        "globe_position": (-3, -2, 1),
        "traffic": 7,
    },
    {
        "code": "BLR",
        "name": "Bangalore",
        "city": "Bangalore",
        "country": "India",
        "latitude": 13.1986,
        "longitude": 77.7066,
        "network_position": (1, -3, 0),
        "globe_position": (-1, -4, 2),
        "traffic": 6,
    },
    {
        "code": "HYD",
        "name": "Hyderabad",
        "city": "Hyderabad",
        "country": "India",
        "latitude": 17.2403,
        "longitude": 78.4294,
        "network_position": (3, -2, 0),
        "globe_position": (1, -3, 0),
        "traffic": 5,
    },
    {
        "code": "CCU",
        "name": "Kolkata",
        "city": "Kolkata",
        "country": "India",
        "latitude": 22.6547,
        "longitude": 88.4467,
        "network_position": (2, 2, 0),
        "globe_position": (3, 2, -1),
        "traffic": 6,
    },
    {
        "code": "MAA",
        "name": "Chennai",
        "city": "Chennai",
        "country": "India",
        "latitude": 12.9941,
        "longitude": 80.1709,
        "network_position": (0, -3, 0),
        "globe_position": (2, -2, -2),
        "traffic": 5,
    },
    {
        "code": "GOI",
        "name": "Goa",
        "city": "Goa",
        "country": "India",
        "latitude": 15.3808,
        "longitude": 73.8314,
        "network_position": (-2, -3, 0),
        "globe_position": (-2, -3, -3),
        "traffic": 4,
    },
    {
        "code": "COK",
        "name": "Kochi",
        "city": "Kochi",
        "country": "India",
        "latitude": 10.1520,
        "longitude": 76.4019,
        "network_position": None,
        "globe_position": None,
        "traffic": None,
    },
    {
        "code": "IXC",
        "name": "Chandigarh",
        "city": "Chandigarh",
        "country": "India",
        "latitude": 30.6735,
        "longitude": 76.7885,
        "network_position": None,
        "globe_position": None,
        "traffic": None,
    },
    {
        "code": "JFK",
        "name": "New York",
        "city": "New York",
        "country": "USA",
        "latitude": 40.6413,
        "longitude": -73.7781,
        "network_position": None,
        "globe_position": (-8, 4, -4),
        "traffic": 9,
    },
    {
        "code": "LHR",
        "name": "London",
        "city": "London",
        "country": "UK",
        "latitude": 51.4700,
        "longitude": -0.4543,
        "network_position": None,
        "globe_position": (-6, 5, -2),
        "traffic": 9,
    },
    {
        "code": "DXB",
        "name": "Dubai",
        "city": "Dubai",
        "country": "UAE",
        "latitude": 25.2532,
        "longitude": 55.3657,
        "network_position": None,
        "globe_position": (-4, 0, 5),
        "traffic": 8,
    },
    {
        "code": "SIN",
        "name": "Singapore",
        "city": "Singapore",
        "country": "Singapore",
        "latitude": 1.3644,
        "longitude": 103.9915,
        "network_position": None,
        "globe_position": (5, -5, 2),
        "traffic": 7,
    },
    {
        "code": "HKG",
        "name": "Hong Kong",
        "city": "Hong Kong",
        "country": "China",
        "latitude": 22.3080,
        "longitude": 113.9185,
        "network_position": None,
        "globe_position": (7, -1, 3),
        "traffic": 7,
    },
    {
        "code": "SYD",
        "name": "Sydney",
        "city": "Sydney",
        "country": "Australia",
        "latitude": -33.9399,
        "longitude": 151.1753,
        "network_position": None,
        "globe_position": (8, -6, -5),
        "traffic": 6,
    },
]
