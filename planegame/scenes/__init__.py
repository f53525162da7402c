"""Scenes: the scene base class and identifiers, the main menu and the game scene."""