"""Image content defaults. Images are edited inline, not by the assistant."""

IMAGE_CONTENT = {
    "hero.poster": {
        "default": {"url": "/static/images/hero-poster.jpg", "alt": "Youth football players on the field"},
        "description": "Hero background poster image (fallback when video doesn't play)",
        "page": "Homepage",
        "section": "Hero",
    },
    "hero.video": {
        "default": {"url": "/static/videos/hero.mp4", "alt": "Hero background video"},
        "description": "Hero background video (plays on desktop)",
        "page": "Homepage",
        "section": "Hero",
    },
    "header.logo": {
        "default": {"url": "/static/images/logo.png", "alt": "RiseUp Youth Football logo"},
        "description": "Site logo displayed in the navigation header",
        "page": "All pages",
        "section": "Header",
    },
    "tackle_football.hero": {
        "default": {"url": "/static/images/tackle-football-hero.jpg", "alt": "RiseUp Tackle Football Players"},
        "description": "Hero banner image for tackle football page",
        "page": "Tackle Football",
        "section": "Hero",
    },
    "donation.flag_background": {
        "default": {
            "url": "https://images.unsplash.com/photo-1485230895905-ec40ba36b9bc?w=1920&q=80",
            "alt": "American flag background",
        },
        "description": "Faded flag background image for donation section",
        "page": "Homepage",
        "section": "Donation",
    },
}
