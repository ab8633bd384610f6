"""Page sections that can be shown or hidden, and the page each lives on."""

SECTIONS = {
    "homepage.hero": {"page_url": "/", "label": "Homepage hero"},
    "homepage.programs": {"page_url": "/", "label": "Program tiles"},
    "homepage.impact": {"page_url": "/", "label": "Impact stats and testimonial"},
    "homepage.safety": {"page_url": "/", "label": "Safety commitment"},
    "homepage.donation": {"page_url": "/", "label": "Donation call-out"},
    "sponsor.pricing": {"page_url": "/become-a-sponsor", "label": "Sponsorship tiers"},
    "sponsor.partners": {"page_url": "/become-a-sponsor", "label": "Current partners"},
    "give.donation": {"page_url": "/ways-to-give", "label": "Donation options"},
}
