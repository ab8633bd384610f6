"""Editable text content — defaults and descriptions for every text key."""

TEXT_CONTENT = {
    "hero.headline": {
        "default": "BUILDING CHAMPIONS ON AND OFF THE FIELD",
        "description": "Main headline on the homepage",
        "page": "Homepage",
        "section": "Hero",
    },
    "hero.subtitle": {
        "default": (
            "Youth football programs for ages 5-14. Building character, discipline, "
            "and teamwork through the game we love."
        ),
        "description": "Subtitle text below the main headline",
        "page": "Homepage",
        "section": "Hero",
    },
    "hero.cta_primary": {
        "default": "Register Now",
        "description": "Primary call-to-action button text",
        "page": "Homepage",
        "section": "Hero",
    },
    "hero.cta_secondary": {
        "default": "Learn More",
        "description": "Secondary call-to-action button text",
        "page": "Homepage",
        "section": "Hero",
    },
    "programs.section_title": {
        "default": "Our Programs",
        "description": "Section title for programs grid",
        "page": "Homepage",
        "section": "Programs",
    },
    "impact.title": {
        "default": "THE RISEUP EFFECT",
        "description": "Impact section main title",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.stat_1_value": {
        "default": "500+",
        "description": "First stat number (e.g., 500+)",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.stat_1_label": {
        "default": "Athletes Trained",
        "description": "First stat label (e.g., Athletes Trained)",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.stat_2_value": {
        "default": "24",
        "description": "Second stat number (e.g., 12)",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.stat_2_label": {
        "default": "Teams Strong",
        "description": "Second stat label (e.g., Seasons Strong)",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.stat_3_value": {
        "default": "95%",
        "description": "Third stat number (e.g., 95%)",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.stat_3_label": {
        "default": "Return Rate",
        "description": "Third stat label (e.g., Return Rate)",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.stat_4_value": {
        "default": "1,000+",
        "description": "Fourth stat number (e.g., 1,000+)",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.stat_4_label": {
        "default": "Hours Coached",
        "description": "Fourth stat label (e.g., Hours Coached)",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.testimonial_quote": {
        "default": "RiseUp taught my son that failure is just another rep. He's a different kid now.",
        "description": "Featured testimonial quote",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.testimonial_author": {
        "default": "Sarah M.",
        "description": "Testimonial author name",
        "page": "Homepage",
        "section": "Impact",
    },
    "impact.testimonial_role": {
        "default": "Flag Football Parent",
        "description": "Testimonial author role/title",
        "page": "Homepage",
        "section": "Impact",
    },
    "sponsor.headline": {
        "default": "BECOME A SPONSOR",
        "description": "Headline on the sponsorship page",
        "page": "Become a Sponsor",
        "section": "Hero",
    },
    "sponsor.intro": {
        "default": (
            "Put your business in front of hundreds of local families while keeping "
            "registration affordable for every kid who wants to play."
        ),
        "description": "Intro paragraph on the sponsorship page",
        "page": "Become a Sponsor",
        "section": "Hero",
    },
    "give.headline": {
        "default": "WAYS TO GIVE",
        "description": "Headline on the donation page",
        "page": "Ways to Give",
        "section": "Hero",
    },
    "give.intro": {
        "default": (
            "Every dollar goes to equipment, field time, and scholarships so no player "
            "is turned away."
        ),
        "description": "Intro paragraph on the donation page",
        "page": "Ways to Give",
        "section": "Hero",
    },
}
