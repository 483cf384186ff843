def clamp(value, low, high):
    if value < low or value > high:
        return max(low, min(value, high))
    return value
