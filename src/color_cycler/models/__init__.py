"""Models - enums, color value object, settings domain"""
