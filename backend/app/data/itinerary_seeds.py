"""Curated itinerary templates loaded into the template cache at startup.

Each day is (title, activities); each activity is
(time, description, type, location, lat, lng). No dates, no costs.
"""

SeedActivity = tuple[str, str, str, str, float, float]
SeedDay = tuple[str, list[SeedActivity]]

PARIS: list[SeedDay] = [
    ("Arrival in Paris", [
        ("14:00", "Arrive at CDG and transfer to hotel", "transport", "Charles de Gaulle Airport", 49.0097, 2.5479),
        ("16:30", "Stroll along the Seine", "activity", "Quai de la Tournelle", 48.8500, 2.3550),
        ("18:00", "Sunset at the Eiffel Tower", "activity", "Eiffel Tower", 48.8584, 2.2945),
        ("20:00", "Dinner at a bistro in Saint-Germain", "meal", "Saint-Germain-des-Prés", 48.8540, 2.3330),
    ]),
    ("Art and the Right Bank", [
        ("09:00", "Louvre Museum highlights", "activity", "Louvre Museum", 48.8606, 2.3376),
        ("12:30", "Lunch near Palais Royal", "meal", "Palais Royal", 48.8637, 2.3372),
        ("14:30", "Tuileries Garden and Place de la Concorde", "activity", "Jardin des Tuileries", 48.8635, 2.3275),
        ("16:30", "Walk the Champs-Élysées to the Arc de Triomphe", "activity", "Arc de Triomphe", 48.8738, 2.2950),
        ("19:30", "Dinner in the 8th arrondissement", "meal", "Rue de Ponthieu", 48.8710, 2.3080),
    ]),
    ("Île de la Cité and the Marais", [
        ("09:00", "Notre-Dame and Sainte-Chapelle", "activity", "Sainte-Chapelle", 48.8554, 2.3450),
        ("12:00", "Falafel lunch in the Marais", "meal", "Rue des Rosiers", 48.8572, 2.3588),
        ("14:00", "Musée Picasso", "activity", "Musée Picasso", 48.8598, 2.3625),
        ("16:30", "Place des Vosges", "activity", "Place des Vosges", 48.8556, 2.3655),
        ("19:30", "Dinner in the Latin Quarter", "meal", "Latin Quarter", 48.8493, 2.3470),
    ]),
    ("Montmartre", [
        ("09:30", "Metro to Montmartre", "transport", "Abbesses Station", 48.8844, 2.3384),
        ("10:00", "Sacré-Cœur Basilica", "activity", "Sacré-Cœur", 48.8867, 2.3431),
        ("12:30", "Lunch at Place du Tertre", "meal", "Place du Tertre", 48.8865, 2.3408),
        ("15:00", "Musée d'Orsay", "activity", "Musée d'Orsay", 48.8600, 2.3266),
        ("19:30", "Seine river cruise with dinner", "meal", "Port de la Bourdonnais", 48.8607, 2.2958),
    ]),
    ("Versailles day trip", [
        ("08:30", "RER C to Versailles", "transport", "Versailles Château Rive Gauche", 48.8008, 2.1296),
        ("09:30", "Palace of Versailles", "activity", "Palace of Versailles", 48.8049, 2.1204),
        ("13:00", "Lunch in Versailles town", "meal", "Rue de Satory", 48.8010, 2.1280),
        ("14:30", "Gardens and Trianon estates", "activity", "Petit Trianon", 48.8155, 2.1093),
        ("19:30", "Dinner back in Paris", "meal", "Le Marais", 48.8590, 2.3600),
    ]),
    ("Left Bank wander", [
        ("09:30", "Luxembourg Gardens", "activity", "Jardin du Luxembourg", 48.8462, 2.3372),
        ("11:30", "Panthéon", "activity", "Panthéon", 48.8462, 2.3464),
        ("13:00", "Lunch at a crêperie in Montparnasse", "meal", "Rue du Montparnasse", 48.8430, 2.3260),
        ("15:00", "Catacombs of Paris", "activity", "Catacombes de Paris", 48.8339, 2.3324),
        ("19:30", "Farewell dinner", "meal", "Saint-Germain-des-Prés", 48.8540, 2.3330),
    ]),
    ("Departure", [
        ("09:00", "Breakfast at a boulangerie", "meal", "Rue Cler", 48.8560, 2.3060),
        ("10:30", "Last-minute shopping at Galeries Lafayette", "activity", "Galeries Lafayette", 48.8738, 2.3320),
        ("12:30", "Transfer to CDG", "transport", "Gare du Nord", 48.8809, 2.3553),
        ("15:00", "Depart from Charles de Gaulle", "transport", "Charles de Gaulle Airport", 49.0097, 2.5479),
    ]),
]

TOKYO: list[SeedDay] = [
    ("Arrival in Tokyo", [
        ("14:00", "Arrive at Haneda and transfer to Shinjuku", "transport", "Haneda Airport", 35.5494, 139.7798),
        ("16:30", "Tokyo Metropolitan Government observatory", "activity", "Tokyo Metropolitan Government Building", 35.6896, 139.6917),
        ("19:00", "Yakitori in Omoide Yokocho", "meal", "Omoide Yokocho", 35.6938, 139.6994),
    ]),
    ("Shibuya and Harajuku", [
        ("09:00", "Meiji Shrine", "activity", "Meiji Jingu", 35.6764, 139.6993),
        ("11:00", "Takeshita Street", "activity", "Takeshita Street", 35.6715, 139.7031),
        ("12:30", "Lunch in Omotesando", "meal", "Omotesando", 35.6654, 139.7120),
        ("15:00", "Shibuya Crossing and Shibuya Sky", "activity", "Shibuya Crossing", 35.6595, 139.7004),
        ("19:00", "Dinner in Shibuya", "meal", "Shibuya", 35.6580, 139.7016),
    ]),
    ("Asakusa and Ueno", [
        ("09:00", "Senso-ji Temple", "activity", "Senso-ji Temple", 35.7148, 139.7967),
        ("11:30", "Nakamise street snacks", "meal", "Nakamise-dori", 35.7118, 139.7965),
        ("13:30", "Tokyo National Museum", "activity", "Tokyo National Museum", 35.7188, 139.7765),
        ("16:30", "Ameyoko market", "activity", "Ameya-Yokocho", 35.7101, 139.7747),
        ("19:00", "Ramen dinner in Ueno", "meal", "Ueno", 35.7138, 139.7773),
    ]),
    ("Markets and the bay", [
        ("08:00", "Tsukiji Outer Market breakfast", "meal", "Tsukiji Outer Market", 35.6655, 139.7707),
        ("10:00", "Hamarikyu Gardens", "activity", "Hamarikyu Gardens", 35.6600, 139.7630),
        ("12:30", "Water bus to Odaiba", "transport", "Hinode Pier", 35.6530, 139.7590),
        ("14:00", "teamLab Planets", "activity", "teamLab Planets", 35.6491, 139.7897),
        ("19:00", "Sushi dinner in Ginza", "meal", "Ginza", 35.6717, 139.7650),
    ]),
    ("Nikko day trip", [
        ("08:00", "Limited express to Nikko", "transport", "Tobu Asakusa Station", 35.7107, 139.7980),
        ("10:30", "Toshogu Shrine", "activity", "Nikko Toshogu", 36.7581, 139.5989),
        ("13:00", "Yuba lunch", "meal", "Nikko", 36.7500, 139.6050),
        ("14:30", "Kegon Falls", "activity", "Kegon Falls", 36.7381, 139.5014),
        ("19:30", "Dinner back in Tokyo", "meal", "Asakusa", 35.7120, 139.7960),
    ]),
    ("Akihabara and Tokyo Tower", [
        ("10:00", "Akihabara electronics and anime shops", "activity", "Akihabara", 35.6984, 139.7731),
        ("12:30", "Lunch in Kanda", "meal", "Kanda", 35.6918, 139.7709),
        ("14:30", "Imperial Palace East Gardens", "activity", "Imperial Palace East Gardens", 35.6852, 139.7594),
        ("17:30", "Tokyo Tower at dusk", "activity", "Tokyo Tower", 35.6586, 139.7454),
        ("19:30", "Izakaya dinner in Roppongi", "meal", "Roppongi", 35.6628, 139.7314),
    ]),
    ("Departure", [
        ("09:00", "Breakfast at a kissaten", "meal", "Jimbocho", 35.6959, 139.7577),
        ("11:00", "Souvenir shopping at Tokyo Station", "activity", "Tokyo Station", 35.6812, 139.7671),
        ("13:00", "Monorail to Haneda", "transport", "Hamamatsucho Station", 35.6555, 139.7570),
        ("15:00", "Depart from Haneda", "transport", "Haneda Airport", 35.5494, 139.7798),
    ]),
]

ROME: list[SeedDay] = [
    ("Arrival in Rome", [
        ("14:00", "Arrive at Fiumicino and transfer to the centre", "transport", "Fiumicino Airport", 41.8003, 12.2389),
        ("16:30", "Trevi Fountain and Spanish Steps", "activity", "Trevi Fountain", 41.9009, 12.4833),
        ("19:30", "Dinner in Monti", "meal", "Monti", 41.8955, 12.4923),
    ]),
    ("Ancient Rome", [
        ("09:00", "Colosseum", "activity", "Colosseum", 41.8902, 12.4922),
        ("11:30", "Roman Forum and Palatine Hill", "activity", "Roman Forum", 41.8925, 12.4853),
        ("13:30", "Lunch near Campo de' Fiori", "meal", "Campo de' Fiori", 41.8956, 12.4722),
        ("16:00", "Pantheon and Piazza Navona", "activity", "Pantheon", 41.8986, 12.4769),
        ("20:00", "Dinner in Trastevere", "meal", "Trastevere", 41.8897, 12.4700),
    ]),
    ("Vatican", [
        ("08:30", "Vatican Museums and Sistine Chapel", "activity", "Vatican Museums", 41.9065, 12.4536),
        ("12:30", "Lunch in Prati", "meal", "Prati", 41.9070, 12.4630),
        ("14:30", "St. Peter's Basilica", "activity", "St. Peter's Basilica", 41.9022, 12.4539),
        ("17:00", "Castel Sant'Angelo", "activity", "Castel Sant'Angelo", 41.9031, 12.4663),
        ("20:00", "Dinner near Piazza Navona", "meal", "Piazza Navona", 41.8992, 12.4731),
    ]),
    ("Borghese and Testaccio", [
        ("09:30", "Galleria Borghese", "activity", "Galleria Borghese", 41.9142, 12.4921),
        ("12:00", "Villa Borghese gardens", "activity", "Villa Borghese", 41.9128, 12.4852),
        ("13:30", "Lunch at Testaccio Market", "meal", "Mercato di Testaccio", 41.8766, 12.4755),
        ("16:00", "Aventine Keyhole and Orange Garden", "activity", "Giardino degli Aranci", 41.8847, 12.4794),
        ("20:00", "Farewell dinner", "meal", "Testaccio", 41.8780, 12.4760),
    ]),
    ("Departure", [
        ("09:00", "Espresso and cornetto", "meal", "Sant'Eustachio", 41.8984, 12.4752),
        ("10:30", "Last walk through the centro storico", "activity", "Piazza di Spagna", 41.9058, 12.4823),
        ("12:30", "Leonardo Express to Fiumicino", "transport", "Roma Termini", 41.9010, 12.5018),
        ("15:00", "Depart from Fiumicino", "transport", "Fiumicino Airport", 41.8003, 12.2389),
    ]),
]

SINGAPORE: list[SeedDay] = [
    ("Arrival in Singapore", [
        ("14:00", "Arrive at Changi and see the Jewel waterfall", "transport", "Changi Airport", 1.3644, 103.9915),
        ("17:00", "Marina Bay waterfront promenade", "activity", "Marina Bay", 1.2834, 103.8607),
        ("19:30", "Satay by the Bay", "meal", "Satay by the Bay", 1.2823, 103.8686),
    ]),
    ("Gardens and the bay", [
        ("09:00", "Gardens by the Bay domes", "activity", "Gardens by the Bay", 1.2816, 103.8636),
        ("12:30", "Lunch at Lau Pa Sat", "meal", "Lau Pa Sat", 1.2806, 103.8505),
        ("14:30", "ArtScience Museum", "activity", "ArtScience Museum", 1.2863, 103.8593),
        ("19:45", "Supertree Grove light show", "activity", "Supertree Grove", 1.2819, 103.8646),
    ]),
    ("Neighbourhoods", [
        ("09:00", "Chinatown heritage walk", "activity", "Chinatown", 1.2838, 103.8435),
        ("12:00", "Maxwell Food Centre lunch", "meal", "Maxwell Food Centre", 1.2803, 103.8447),
        ("14:30", "Little India and Kampong Glam", "activity", "Kampong Glam", 1.3022, 103.8590),
        ("19:30", "Dinner on Haji Lane", "meal", "Haji Lane", 1.3006, 103.8589),
    ]),
    ("Sentosa", [
        ("09:30", "Cable car to Sentosa", "transport", "Mount Faber", 1.2711, 103.8180),
        ("10:30", "S.E.A. Aquarium", "activity", "S.E.A. Aquarium", 1.2583, 103.8205),
        ("13:00", "Beach lunch at Siloso", "meal", "Siloso Beach", 1.2560, 103.8110),
        ("16:00", "Fort Siloso", "activity", "Fort Siloso", 1.2596, 103.8110),
        ("19:30", "Chilli crab dinner", "meal", "East Coast Seafood Centre", 1.3010, 103.9140),
    ]),
    ("Departure", [
        ("09:00", "Kaya toast breakfast", "meal", "Ya Kun Kaya Toast", 1.2817, 103.8480),
        ("10:30", "Orchard Road shopping", "activity", "Orchard Road", 1.3048, 103.8318),
        ("12:30", "MRT to Changi", "transport", "Orchard MRT", 1.3040, 103.8320),
        ("15:00", "Depart from Changi", "transport", "Changi Airport", 1.3644, 103.9915),
    ]),
]

DUBAI: list[SeedDay] = [
    ("Arrival & Downtown", [
        ("15:00", "Arrive Dubai DXB", "transport", "Dubai Airport", 25.2528, 55.3644),
        ("19:00", "Burj Khalifa sunset", "activity", "Burj Khalifa", 25.1972, 55.2744),
        ("21:00", "Dubai Mall dinner", "meal", "Dubai Mall", 25.1972, 55.2795),
    ]),
    ("Old Dubai", [
        ("09:00", "Dubai Creek abra ride", "activity", "Dubai Creek", 25.2697, 55.2963),
        ("11:00", "Gold & Spice Souks", "activity", "Deira Souks", 25.2697, 55.3),
        ("13:00", "Arabic lunch", "meal", "Al Fahidi", 25.2636, 55.2972),
    ]),
    ("Palm & Beach", [
        ("10:00", "Atlantis Aquaventure", "activity", "Atlantis The Palm", 25.1304, 55.1172),
        ("14:00", "Lunch at Atlantis", "meal", "Atlantis The Palm", 25.1304, 55.1172),
        ("17:00", "JBR Beach walk", "activity", "JBR Beach", 25.0762, 55.1331),
    ]),
    ("Desert Safari", [
        ("10:00", "Morning at leisure", "activity", "Hotel", 25.1972, 55.2744),
        ("15:00", "Desert Safari pickup", "activity", "Dubai Desert", 24.9833, 55.4667),
        ("20:00", "BBQ dinner in desert", "meal", "Desert Camp", 24.9833, 55.4667),
    ]),
    ("Marina & Blue Waters", [
        ("10:00", "Dubai Marina walk", "activity", "Dubai Marina", 25.0762, 55.1404),
        ("13:00", "Lunch at Marina", "meal", "Pier 7", 25.0762, 55.1404),
        ("17:00", "Ain Dubai (Eye)", "activity", "Bluewaters Island", 25.0786, 55.1192),
    ]),
    ("Culture & Frame", [
        ("09:00", "Dubai Frame", "activity", "Dubai Frame", 25.2354, 55.3003),
        ("12:00", "Lunch at City Walk", "meal", "City Walk", 25.2094, 55.2614),
        ("15:00", "Museum of the Future", "activity", "Museum of the Future", 25.2197, 55.2806),
    ]),
    ("Shopping Day", [
        ("10:00", "Mall of Emirates", "activity", "Mall of the Emirates", 25.1181, 55.2006),
        ("14:00", "Lunch at MOE", "meal", "Mall of the Emirates", 25.1181, 55.2006),
        ("17:00", "Global Village", "activity", "Global Village", 25.0717, 55.3069),
    ]),
    ("Departure", [
        ("09:00", "Hotel checkout", "activity", "Hotel", 25.1972, 55.2744),
        ("10:30", "Last shawarma", "meal", "Airport area", 25.2528, 55.3644),
        ("13:00", "Depart Dubai", "transport", "Dubai Airport", 25.2528, 55.3644),
    ]),
]

LONDON: list[SeedDay] = [
    ("Arrival & Westminster", [
        ("14:00", "Arrive London Heathrow", "transport", "Heathrow Airport", 51.47, -0.4543),
        ("17:00", "Westminster Abbey area", "activity", "Westminster", 51.4994, -0.1273),
        ("20:00", "Dinner in Soho", "meal", "Soho", 51.5137, -0.1337),
    ]),
    ("Royal London", [
        ("10:00", "Buckingham Palace", "activity", "Buckingham Palace", 51.5014, -0.1419),
        ("13:00", "Lunch at St James", "meal", "St James's Park", 51.5025, -0.1348),
        ("15:00", "Tower of London", "activity", "Tower of London", 51.5081, -0.0759),
    ]),
    ("Museums Day", [
        ("10:00", "British Museum", "activity", "British Museum", 51.5194, -0.127),
        ("13:00", "Lunch in Bloomsbury", "meal", "Bloomsbury", 51.5194, -0.127),
        ("15:00", "Natural History Museum", "activity", "Natural History Museum", 51.4967, -0.1764),
    ]),
    ("South Bank", [
        ("10:00", "Tate Modern", "activity", "Tate Modern", 51.5076, -0.0994),
        ("13:00", "Borough Market lunch", "meal", "Borough Market", 51.5055, -0.091),
        ("16:00", "London Eye", "activity", "London Eye", 51.5033, -0.1196),
    ]),
    ("Harry Potter & Markets", [
        ("09:00", "Kings Cross Platform 9¾", "activity", "Kings Cross", 51.5322, -0.124),
        ("11:00", "Camden Market", "activity", "Camden Market", 51.5415, -0.1463),
        ("14:00", "Camden lunch", "meal", "Camden", 51.5415, -0.1463),
    ]),
    ("Greenwich", [
        ("10:00", "Thames boat to Greenwich", "transport", "Greenwich Pier", 51.4826, -0.0077),
        ("11:30", "Royal Observatory", "activity", "Royal Observatory", 51.4772, -0.0015),
        ("14:00", "Lunch in Greenwich", "meal", "Greenwich Market", 51.4816, -0.0085),
    ]),
    ("Notting Hill & Hyde Park", [
        ("10:00", "Notting Hill walk", "activity", "Notting Hill", 51.5173, -0.2017),
        ("12:00", "Portobello Road Market", "activity", "Portobello Road", 51.5194, -0.2051),
        ("15:00", "Hyde Park stroll", "activity", "Hyde Park", 51.5073, -0.1657),
    ]),
    ("Theatre & Covent Garden", [
        ("11:00", "Covent Garden", "activity", "Covent Garden", 51.512, -0.1227),
        ("13:00", "Lunch at Covent Garden", "meal", "Covent Garden", 51.512, -0.1227),
        ("19:30", "West End show", "activity", "West End", 51.5115, -0.128),
    ]),
    ("Day Trip: Stonehenge", [
        ("08:00", "Coach to Stonehenge", "transport", "Victoria Coach Station", 51.4952, -0.1486),
        ("11:00", "Stonehenge visit", "activity", "Stonehenge", 51.1789, -1.8262),
        ("14:00", "Lunch in Salisbury", "meal", "Salisbury", 51.0688, -1.7945),
    ]),
    ("Departure", [
        ("09:00", "Hotel checkout", "activity", "Hotel", 51.5074, -0.1278),
        ("10:30", "Last fish & chips", "meal", "Central London", 51.5074, -0.1278),
        ("13:00", "Depart London", "transport", "Heathrow Airport", 51.47, -0.4543),
    ]),
]

BANGKOK: list[SeedDay] = [
    ("Arrival & Khao San", [
        ("15:00", "Arrive Suvarnabhumi Airport", "transport", "Suvarnabhumi Airport", 13.6900, 100.7501),
        ("18:00", "Khao San Road evening", "activity", "Khao San Road", 13.7589, 100.4974),
        ("20:00", "Street food dinner", "meal", "Khao San Road", 13.7589, 100.4974),
    ]),
    ("Grand Palace & Temples", [
        ("08:30", "Grand Palace visit", "activity", "Grand Palace", 13.7500, 100.4913),
        ("12:00", "Lunch near palace", "meal", "Tha Maharaj", 13.7567, 100.4881),
        ("14:00", "Wat Pho temple", "activity", "Wat Pho", 13.7465, 100.4930),
    ]),
    ("Chatuchak & Shopping", [
        ("09:00", "Chatuchak Weekend Market", "activity", "Chatuchak Market", 13.7999, 100.5508),
        ("13:00", "Market food court lunch", "meal", "Chatuchak Market", 13.7999, 100.5508),
        ("17:00", "MBK Center shopping", "activity", "MBK Center", 13.7448, 100.5298),
    ]),
    ("Floating Markets", [
        ("06:00", "Damnoen Saduak Market", "activity", "Damnoen Saduak", 13.5231, 99.9578),
        ("12:00", "Thai lunch at market", "meal", "Damnoen Saduak", 13.5231, 99.9578),
        ("17:00", "Asiatique riverfront", "activity", "Asiatique", 13.7049, 100.5014),
    ]),
    ("Ayutthaya Day Trip", [
        ("08:00", "Train to Ayutthaya", "transport", "Hua Lamphong Station", 13.7381, 100.5173),
        ("10:00", "Ancient temples tour", "activity", "Ayutthaya Historical Park", 14.3532, 100.5685),
        ("13:00", "Local lunch", "meal", "Ayutthaya", 14.3532, 100.5685),
    ]),
    ("Modern Bangkok", [
        ("10:00", "Siam Paragon mall", "activity", "Siam Paragon", 13.7466, 100.5347),
        ("13:00", "Food court lunch", "meal", "Siam Paragon", 13.7466, 100.5347),
        ("18:00", "Rooftop bar sunset", "activity", "Sky Bar", 13.7237, 100.5168),
    ]),
    ("Spa & Culture", [
        ("10:00", "Thai massage & spa", "activity", "Wat Pho Massage", 13.7465, 100.4930),
        ("14:00", "Jim Thompson House", "activity", "Jim Thompson House", 13.7494, 100.5278),
        ("19:00", "Farewell dinner cruise", "meal", "Chao Phraya River", 13.7400, 100.5100),
    ]),
    ("Departure", [
        ("09:00", "Hotel checkout", "activity", "Hotel", 13.7466, 100.5347),
        ("11:00", "Last pad thai", "meal", "Thip Samai", 13.7556, 100.5017),
        ("14:00", "Depart Bangkok", "transport", "Suvarnabhumi Airport", 13.6900, 100.7501),
    ]),
]

BALI: list[SeedDay] = [
    ("Arrival in Seminyak", [
        ("14:00", "Arrive Ngurah Rai Airport", "transport", "Ngurah Rai Airport", -8.7467, 115.1670),
        ("17:00", "Seminyak Beach sunset", "activity", "Seminyak Beach", -8.6914, 115.1560),
        ("19:30", "Dinner at Ku De Ta", "meal", "Ku De Ta", -8.6890, 115.1545),
    ]),
    ("Ubud Culture", [
        ("08:00", "Drive to Ubud", "transport", "Ubud", -8.5069, 115.2625),
        ("10:00", "Tegallalang Rice Terraces", "activity", "Tegallalang", -8.4312, 115.2795),
        ("13:00", "Lunch overlooking rice fields", "meal", "Tegallalang", -8.4312, 115.2795),
    ]),
    ("Ubud Temples & Art", [
        ("09:00", "Monkey Forest sanctuary", "activity", "Monkey Forest", -8.5185, 115.2587),
        ("12:00", "Ubud Market lunch", "meal", "Ubud Market", -8.5066, 115.2621),
        ("15:00", "Tirta Empul Temple", "activity", "Tirta Empul", -8.4156, 115.3153),
    ]),
    ("Mount Batur Sunrise", [
        ("02:00", "Mount Batur trek start", "activity", "Mount Batur", -8.2421, 115.3750),
        ("06:00", "Sunrise at summit", "activity", "Mount Batur Summit", -8.2421, 115.3750),
        ("12:00", "Hot springs relaxation", "activity", "Toya Devasya Hot Springs", -8.2583, 115.4003),
    ]),
    ("East Bali", [
        ("09:00", "Tirta Gangga Water Palace", "activity", "Tirta Gangga", -8.4125, 115.5875),
        ("12:00", "Seaside lunch", "meal", "Candidasa", -8.5078, 115.5650),
        ("15:00", "Lempuyang Temple Gates", "activity", "Lempuyang Temple", -8.3906, 115.6308),
    ]),
    ("Nusa Penida Day Trip", [
        ("07:00", "Boat to Nusa Penida", "transport", "Sanur Harbor", -8.6917, 115.2625),
        ("10:00", "Kelingking Beach viewpoint", "activity", "Kelingking Beach", -8.7527, 115.4702),
        ("14:00", "Crystal Bay snorkeling", "activity", "Crystal Bay", -8.7161, 115.4581),
    ]),
    ("Uluwatu & Beaches", [
        ("10:00", "Uluwatu Temple", "activity", "Uluwatu Temple", -8.8294, 115.0849),
        ("13:00", "Beach club lunch", "meal", "Sundays Beach Club", -8.8108, 115.1150),
        ("18:00", "Kecak dance at sunset", "activity", "Uluwatu Temple", -8.8294, 115.0849),
    ]),
    ("Canggu Vibes", [
        ("09:00", "Surf lesson", "activity", "Echo Beach", -8.6553, 115.1244),
        ("12:00", "Healthy brunch", "meal", "Crate Cafe", -8.6488, 115.1361),
        ("17:00", "Tanah Lot Temple sunset", "activity", "Tanah Lot", -8.6214, 115.0867),
    ]),
    ("Spa & Relaxation", [
        ("10:00", "Balinese spa treatment", "activity", "Seminyak Spa", -8.6914, 115.1560),
        ("14:00", "Pool & beach afternoon", "activity", "Potato Head Beach Club", -8.6847, 115.1525),
        ("19:00", "Farewell dinner", "meal", "La Lucciola", -8.6878, 115.1533),
    ]),
    ("Departure", [
        ("09:00", "Hotel checkout", "activity", "Hotel", -8.6914, 115.1560),
        ("11:00", "Last Bali coffee", "meal", "Revolver Espresso", -8.6875, 115.1642),
        ("14:00", "Depart Bali", "transport", "Ngurah Rai Airport", -8.7467, 115.1670),
    ]),
]

NEW_YORK: list[SeedDay] = [
    ("Arrival & Times Square", [
        ("14:00", "Arrive JFK Airport", "transport", "JFK Airport", 40.6413, -73.7781),
        ("18:00", "Times Square lights", "activity", "Times Square", 40.7580, -73.9855),
        ("20:00", "Broadway dinner", "meal", "Theater District", 40.7590, -73.9845),
    ]),
    ("Statue & Downtown", [
        ("09:00", "Statue of Liberty ferry", "activity", "Battery Park", 40.6892, -74.0445),
        ("13:00", "Lunch in Financial District", "meal", "Stone Street", 40.7041, -74.0103),
        ("15:00", "9/11 Memorial", "activity", "9/11 Memorial", 40.7115, -74.0134),
    ]),
    ("Central Park & Museums", [
        ("09:00", "Central Park walk", "activity", "Central Park", 40.7829, -73.9654),
        ("12:00", "Met Museum visit", "activity", "Metropolitan Museum", 40.7794, -73.9632),
        ("19:00", "Upper East Side dinner", "meal", "Upper East Side", 40.7736, -73.9566),
    ]),
    ("Brooklyn Day", [
        ("10:00", "Brooklyn Bridge walk", "activity", "Brooklyn Bridge", 40.7061, -73.9969),
        ("12:00", "DUMBO exploration", "activity", "DUMBO", 40.7033, -73.9894),
        ("15:00", "Williamsburg afternoon", "activity", "Williamsburg", 40.7081, -73.9571),
    ]),
    ("Empire State & Midtown", [
        ("10:00", "Empire State Building", "activity", "Empire State Building", 40.7484, -73.9857),
        ("13:00", "Koreatown lunch", "meal", "Koreatown", 40.7479, -73.9877),
        ("16:00", "Grand Central Terminal", "activity", "Grand Central", 40.7527, -73.9772),
    ]),
    ("High Line & Chelsea", [
        ("10:00", "High Line walk", "activity", "High Line", 40.7480, -74.0048),
        ("12:00", "Chelsea Market lunch", "meal", "Chelsea Market", 40.7424, -74.0060),
        ("15:00", "Hudson Yards", "activity", "Hudson Yards", 40.7536, -74.0019),
    ]),
    ("Broadway & Shopping", [
        ("11:00", "5th Avenue shopping", "activity", "5th Avenue", 40.7549, -73.9840),
        ("14:00", "Rockefeller Center", "activity", "Rockefeller Center", 40.7587, -73.9787),
        ("20:00", "Broadway show", "activity", "Broadway", 40.7590, -73.9845),
    ]),
    ("Departure", [
        ("09:00", "Hotel checkout", "activity", "Hotel", 40.7580, -73.9855),
        ("10:30", "Last NYC bagel", "meal", "Russ & Daughters", 40.7224, -73.9879),
        ("14:00", "Depart New York", "transport", "JFK Airport", 40.6413, -73.7781),
    ]),
]

BARCELONA: list[SeedDay] = [
    ("Arrival & Gothic Quarter", [
        ("14:00", "Arrive Barcelona El Prat", "transport", "El Prat Airport", 41.2974, 2.0833),
        ("17:00", "Gothic Quarter walk", "activity", "Barri Gòtic", 41.3833, 2.1777),
        ("20:00", "Tapas dinner", "meal", "El Born", 41.3850, 2.1825),
    ]),
    ("Gaudí Day", [
        ("09:00", "Sagrada Familia", "activity", "Sagrada Familia", 41.4036, 2.1744),
        ("13:00", "Lunch in Eixample", "meal", "Eixample", 41.3950, 2.1620),
        ("15:00", "Park Güell", "activity", "Park Güell", 41.4145, 2.1527),
    ]),
    ("La Rambla & Beach", [
        ("10:00", "La Boqueria Market", "activity", "La Boqueria", 41.3816, 2.1719),
        ("12:00", "La Rambla stroll", "activity", "La Rambla", 41.3797, 2.1746),
        ("15:00", "Barceloneta Beach", "activity", "Barceloneta", 41.3758, 2.1894),
    ]),
    ("Montjuïc", [
        ("10:00", "Montjuïc Castle", "activity", "Montjuïc Castle", 41.3633, 2.1658),
        ("13:00", "Olympic Stadium area", "activity", "Olympic Stadium", 41.3647, 2.1556),
        ("21:00", "Magic Fountain show", "activity", "Magic Fountain", 41.3714, 2.1519),
    ]),
    ("More Gaudí", [
        ("10:00", "Casa Batlló", "activity", "Casa Batlló", 41.3917, 2.1650),
        ("12:00", "Casa Milà (La Pedrera)", "activity", "Casa Milà", 41.3953, 2.1619),
        ("14:00", "Passeig de Gràcia lunch", "meal", "Passeig de Gràcia", 41.3930, 2.1635),
    ]),
    ("Day Trip: Montserrat", [
        ("08:00", "Train to Montserrat", "transport", "Montserrat", 41.5933, 1.8375),
        ("10:00", "Montserrat Monastery", "activity", "Montserrat Monastery", 41.5933, 1.8375),
        ("13:00", "Mountain lunch", "meal", "Montserrat", 41.5933, 1.8375),
    ]),
    ("Departure", [
        ("09:00", "Hotel checkout", "activity", "Hotel", 41.3850, 2.1734),
        ("10:30", "Last paella", "meal", "Barceloneta", 41.3758, 2.1894),
        ("14:00", "Depart Barcelona", "transport", "El Prat Airport", 41.2974, 2.0833),
    ]),
]

AMSTERDAM: list[SeedDay] = [
    ("Arrival & Canal Ring", [
        ("14:00", "Arrive Schiphol Airport", "transport", "Schiphol Airport", 52.3105, 4.7683),
        ("17:00", "Canal cruise", "activity", "Central Station", 52.3791, 4.9003),
        ("20:00", "Dinner in Jordaan", "meal", "Jordaan", 52.3747, 4.8819),
    ]),
    ("Museums & Culture", [
        ("09:00", "Anne Frank House", "activity", "Anne Frank House", 52.3752, 4.8840),
        ("13:00", "Lunch in Nine Streets", "meal", "De 9 Straatjes", 52.3697, 4.8847),
        ("15:00", "Van Gogh Museum", "activity", "Van Gogh Museum", 52.3584, 4.8811),
    ]),
    ("Rijksmuseum & Vondelpark", [
        ("09:30", "Rijksmuseum visit", "activity", "Rijksmuseum", 52.3600, 4.8852),
        ("13:00", "Museum Quarter lunch", "meal", "Museumplein", 52.3579, 4.8830),
        ("15:00", "Vondelpark relaxation", "activity", "Vondelpark", 52.3579, 4.8686),
    ]),
    ("Neighborhoods", [
        ("10:00", "Albert Cuyp Market", "activity", "Albert Cuyp Market", 52.3559, 4.8947),
        ("13:00", "De Pijp lunch", "meal", "De Pijp", 52.3548, 4.8936),
        ("16:00", "NDSM Wharf art", "activity", "NDSM Wharf", 52.4012, 4.8914),
    ]),
    ("Day Trip: Zaanse Schans", [
        ("09:00", "Train to Zaanse Schans", "transport", "Zaanse Schans", 52.4736, 4.8183),
        ("10:00", "Windmills exploration", "activity", "Zaanse Schans Windmills", 52.4736, 4.8183),
        ("14:00", "Dutch cheese tasting", "meal", "Zaanse Schans", 52.4736, 4.8183),
    ]),
    ("Departure", [
        ("09:00", "Hotel checkout", "activity", "Hotel", 52.3676, 4.9041),
        ("10:30", "Last stroopwafel", "meal", "Albert Cuyp Market", 52.3559, 4.8947),
        ("13:00", "Depart Amsterdam", "transport", "Schiphol Airport", 52.3105, 4.7683),
    ]),
]

ISTANBUL: list[SeedDay] = [
    ("Arrival & Sultanahmet", [
        ("14:00", "Arrive Istanbul Airport", "transport", "Istanbul Airport", 41.2753, 28.7519),
        ("18:00", "Sultanahmet Square walk", "activity", "Sultanahmet", 41.0082, 28.9784),
        ("20:00", "Turkish dinner", "meal", "Sultanahmet", 41.0082, 28.9784),
    ]),
    ("Hagia Sophia & Blue Mosque", [
        ("09:00", "Hagia Sophia visit", "activity", "Hagia Sophia", 41.0086, 28.9802),
        ("12:00", "Lunch near mosque", "meal", "Sultanahmet", 41.0054, 28.9768),
        ("14:00", "Blue Mosque", "activity", "Blue Mosque", 41.0054, 28.9768),
    ]),
    ("Topkapi & Grand Bazaar", [
        ("09:00", "Topkapi Palace", "activity", "Topkapi Palace", 41.0115, 28.9833),
        ("13:00", "Palace gardens lunch", "meal", "Topkapi", 41.0115, 28.9833),
        ("15:00", "Grand Bazaar shopping", "activity", "Grand Bazaar", 41.0108, 28.9680),
    ]),
    ("Bosphorus Cruise", [
        ("10:00", "Bosphorus boat tour", "activity", "Eminönü Pier", 41.0175, 28.9714),
        ("14:00", "Fish lunch on water", "meal", "Bosphorus", 41.0850, 29.0550),
        ("17:00", "Dolmabahçe Palace", "activity", "Dolmabahçe Palace", 41.0392, 29.0003),
    ]),
    ("Asian Side", [
        ("10:00", "Ferry to Kadıköy", "transport", "Kadıköy", 40.9906, 29.0236),
        ("11:00", "Kadıköy Market", "activity", "Kadıköy Market", 40.9906, 29.0236),
        ("15:00", "Moda neighborhood walk", "activity", "Moda", 40.9833, 29.0283),
    ]),
    ("Spice Bazaar & Galata", [
        ("10:00", "Spice Bazaar", "activity", "Spice Bazaar", 41.0167, 28.9708),
        ("13:00", "Karaköy lunch", "meal", "Karaköy", 41.0219, 28.9756),
        ("15:00", "Galata Tower sunset", "activity", "Galata Tower", 41.0256, 28.9742),
    ]),
    ("Departure", [
        ("09:00", "Hotel checkout", "activity", "Hotel", 41.0082, 28.9784),
        ("10:30", "Last Turkish breakfast", "meal", "Karaköy", 41.0219, 28.9756),
        ("14:00", "Depart Istanbul", "transport", "Istanbul Airport", 41.2753, 28.7519),
    ]),
]

SEED_TEMPLATES: dict[str, list[SeedDay]] = {
    "Paris": PARIS,
    "Tokyo": TOKYO,
    "Rome": ROME,
    "Singapore": SINGAPORE,
    "Dubai": DUBAI,
    "London": LONDON,
    "Bangkok": BANGKOK,
    "Bali": BALI,
    "New York": NEW_YORK,
    "Barcelona": BARCELONA,
    "Amsterdam": AMSTERDAM,
    "Istanbul": ISTANBUL,
}
