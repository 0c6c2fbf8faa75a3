"""
Loca Web-Frontend: Flask-Server mit Mehrsprachigkeit, Sessions, Login und statischen Assets.
"""

__version__ = '1.0.0'
