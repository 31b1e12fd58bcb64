"""Type aliases used across the digicard package."""

from typing import Literal

# Layout sections a card can show, in the order they are known
SectionId = Literal["about", "services", "gallery", "hours", "map"]

# Section reordering direction
Direction = Literal["up", "down"]

# Account roles
Role = Literal["user", "admin"]

# Billing interval of a pricing plan
PlanInterval = Literal["monthly", "lifetime"]

# Template layout strategies
LayoutName = Literal["centered", "banner", "console"]

# Avatar framing used by a skin
AvatarShape = Literal["circle", "rounded", "square"]

# Contact channels stored on a card
SocialChannel = Literal[
    "email",
    "phone",
    "whatsapp",
    "website",
    "linkedin",
    "twitter",
    "instagram",
    "youtube",
    "facebook",
    "address",
]

# Image fields that accept uploads
ImageField = Literal["profile_image", "banner_image", "logo_image"]
