"""
Assignment matching and list filters (person, team, "everyone", free text),
plus directory/location search helpers.
"""
