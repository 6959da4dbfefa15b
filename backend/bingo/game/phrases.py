from __future__ import annotations

FREE_SPACE = "FREE SPACE"

CLICHES: list[str] = [
    "Here for the right reasons",
    "Can I steal you?",
    "Most dramatic season",
    "Journey",
    "Process",
    "Helicopter date",
    "Hot tub scene",
    "Someone cries",
    "Champagne toast",
    "Rose ceremony drama",
    "Awkward silence",
    "Group date drama",
    "I'm falling for you",
    "Fantasy suite card",
    "Hometown visit",
    "Meeting the parents",
    "Interrupted conversation",
    "Close-up of a rose",
    "Dramatic music swell",
    "Sunset walk on beach",
    "Will you accept this rose?",
    "Final rose tonight",
    "Connection",
    "Vulnerable moment",
    "Open up emotionally",
    "Trust the process",
    "Love triangle",
    "Cocktail party drama",
    "Tears during ITM",
    "Not here to make friends",
    "Leap of faith",
    "Take a chance on love",
    "Follow my heart",
    "Wife material",
    "Meet my family",
]
