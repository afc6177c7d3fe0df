"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Team Code Configuration
# Uppercase letters without I, O and Q, which are easily misread.
# Codes contain no digits.
CODE_ALPHABET = "ABCDEFGHJKLMNPRSTUVWXYZ"
TEAM_CODE_LENGTH = 4
TEAM_BATCH_SIZE = 100

# Bonus on top of a location's points for its first, second and third visitors
VISIT_BONUSES = (1.0, 0.5, 0.2)

# Asset Generation
# Random prefix length for generated ZIP and PDF file names
ASSET_CODE_LENGTH = 10

# QR codes use error correction level M with a fixed module scale and border
QR_BOX_SIZE = 20
QR_BORDER = 2
QR_FORMAT_PNG = "png"
QR_FORMAT_SVG = "svg"
QR_FORMATS = (QR_FORMAT_PNG, QR_FORMAT_SVG)
QR_DEFAULT_FOREGROUND = "#000000"
QR_DEFAULT_BACKGROUND = "#ffffff"

# PDF Layout (A4 portrait, millimetres)
PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
GAME_NAME_FONT_SIZE = 28.0
LOCATION_NAME_FONT_SIZE = 20.0
TITLE_FONT = "ArchivoBlack"
TITLE_FONT_FILE = "ArchivoBlack-Regular.ttf"
BODY_FONT = "OpenSans"
BODY_FONT_FILE = "OpenSans.ttf"

# Auth Providers
PROVIDER_EMAIL = "email"
PROVIDER_SSO = "sso"
