UNKNOWN_PITCH = "Unknown"

PITCH_NAMES = {
    0: "Fastball (2-seam)",
    1: "Fastball (4-seam)",
    2: "Fastball (sinker)",
    3: "Fastball (cutter)",
    4: "Slider",
    5: "Changeup",
    6: "Curveball",
}


def pitch_from_class_num(class_num: int) -> str:
    """Human readable pitch label for a class index; out of range -> 'Unknown'."""
    return PITCH_NAMES.get(class_num, UNKNOWN_PITCH)
