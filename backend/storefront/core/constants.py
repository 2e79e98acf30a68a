"""
Catalogue constants shared by schemas and endpoints.
"""

COLLECTOR_LEVELS = (
    "Discount Accounts",
    "Expert collector",
    "Renowned Collector",
    "Exalted Collector",
    "Mega Collector",
    "World Collector",
    "World Collector +",
)

CATEGORIES = {
    "mobile_legend": "Mobile Legend",
    "pubg": "PUBG",
}

DEFAULT_CATEGORY = "mobile_legend"

CONTACT_LINKS = {
    "telegram": "tg://resolve?domain=KIM_2Thousand7",
    "viber": "viber://chat?number=+959962222385",
}

# Table names in the hosted database
ACCOUNTS_TABLE = "accounts"
ADS_TABLE = "ads"
RANK_BOOST_TABLE = "rank_boost"
ADMIN_USERS_TABLE = "admin_users"
