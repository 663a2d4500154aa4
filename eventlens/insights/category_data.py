"""
Static keyword and phrase data for event category detection.

Separated from categories.py and generator.py so the tables can be reviewed
and edited without touching matching or templating code. Dict order is match
priority: a title containing both "meeting" and "deadline" is a meeting.
"""

from __future__ import annotations

from eventlens.insights.models import EventCategory

DEFAULT_CATEGORY_KEYWORDS: dict[EventCategory, tuple[str, ...]] = {
    EventCategory.MEETING: ("meeting", "call", "zoom"),
    EventCategory.INTERVIEW: ("interview",),
    EventCategory.PRESENTATION: ("presentation", "demo"),
    EventCategory.APPOINTMENT: ("appointment", "doctor", "dentist"),
    EventCategory.FITNESS: ("workout", "gym", "exercise"),
    EventCategory.SOCIAL: ("party", "celebration"),
    EventCategory.TRAVEL: ("travel", "flight", "trip"),
    EventCategory.DEADLINE: ("deadline", "due"),
    EventCategory.MEAL: ("lunch", "dinner", "meal"),
}

# {title}, {date}, {time} are filled in by the generator
SUMMARY_TEMPLATES: dict[EventCategory, str] = {
    EventCategory.MEETING: (
        'Professional meeting "{title}" scheduled for {date} at {time}'
        " - prepare agenda and materials."
    ),
    EventCategory.INTERVIEW: (
        'Important interview "{title}" on {date} at {time}'
        " - research company and practice responses."
    ),
    EventCategory.PRESENTATION: (
        'Presentation event "{title}" happening {date} at {time}'
        " - rehearse content and test equipment."
    ),
    EventCategory.APPOINTMENT: (
        'Healthcare appointment "{title}" scheduled for {date} at {time}'
        " - bring documents and insurance."
    ),
    EventCategory.FITNESS: (
        'Fitness activity "{title}" planned for {date} at {time}'
        " - stay hydrated and bring gear."
    ),
    EventCategory.SOCIAL: (
        'Social celebration "{title}" on {date} at {time}'
        " - bring positive energy and enjoy the moment."
    ),
    EventCategory.TRAVEL: (
        'Travel event "{title}" departing {date} at {time}'
        " - check documents and arrive early."
    ),
    EventCategory.DEADLINE: (
        'Important deadline "{title}" on {date} at {time}'
        " - prioritize completion and quality."
    ),
    EventCategory.MEAL: (
        'Dining event "{title}" scheduled for {date} at {time}'
        " - enjoy good food and company."
    ),
    EventCategory.GENERAL: (
        'Event "{title}" taking place on {date} at {time}'
        " - allocate time and prepare accordingly."
    ),
}

BIRTHDAY_SUMMARY_WITH_NAME = (
    "🎂 {name}'s birthday celebration on {date} at {time}"
    " - a special day to show love, bring joy, and create lasting memories together."
)
BIRTHDAY_SUMMARY_GENERIC = (
    '🎂 Birthday celebration "{title}" on {date} at {time}'
    " - a wonderful opportunity to celebrate life, share happiness,"
    " and make someone feel truly special."
)

CATEGORY_SUGGESTIONS: dict[EventCategory, tuple[str, ...]] = {
    EventCategory.MEETING: (
        "💻 Test your audio/video setup and prepare an agenda beforehand.",
        "📋 Review any shared documents or materials in advance.",
    ),
    EventCategory.INTERVIEW: (
        "🎯 Research the company and prepare answers to common questions.",
        "👔 Plan your outfit and arrive 10 minutes early for best impression.",
    ),
    EventCategory.PRESENTATION: (
        "🎤 Practice your presentation and test all technical equipment.",
        "❓ Prepare for potential questions from the audience.",
    ),
    EventCategory.APPOINTMENT: (
        "📄 Bring necessary documents, insurance cards, and valid ID.",
        "📝 Prepare a list of questions or concerns to discuss.",
    ),
    EventCategory.FITNESS: (
        "👟 Pack your workout clothes, water bottle, and towel.",
        "🍎 Have a light snack 30 minutes before if needed.",
    ),
    EventCategory.SOCIAL: (
        "🎁 Don't forget to bring a gift if appropriate for the occasion.",
        "📸 Charge your phone for photos and create lasting memories.",
    ),
    EventCategory.TRAVEL: (
        "✈️ Check in online and verify your travel documents are current.",
        "🧳 Pack essentials and arrive at the airport with plenty of time.",
    ),
    EventCategory.DEADLINE: (
        "⏱️ Break down remaining tasks and prioritize the most critical ones.",
        "✅ Double-check your work for quality and completeness.",
    ),
    EventCategory.MEAL: (
        "🍽️ Confirm the reservation and check the menu ahead of time.",
        "🗺️ Plan your route so you arrive a few minutes early.",
    ),
    EventCategory.GENERAL: (
        "📖 Review the event details and prepare any necessary materials.",
        "🗺️ Confirm the location and plan your route in advance.",
    ),
}

URGENCY_SUGGESTIONS = {
    "today": "📅 This event is today - make sure you're prepared and ready!",
    "tomorrow": "⏰ This event is tomorrow - set a reminder and prepare tonight.",
    "upcoming": "🔔 Set a reminder 15-30 minutes before the event starts.",
}

BIRTHDAY_GIFT_WITH_NAME = (
    "🎁 Don't forget to get a thoughtful gift for {name} - consider their interests and hobbies."
)
BIRTHDAY_GIFT_GENERIC = "🎁 Prepare a thoughtful gift that shows you care about this special person."
BIRTHDAY_CELEBRATION_WITH_NAME = (
    "🎂 Plan something special to make {name} feel celebrated"
    " - maybe their favorite cake or activity."
)
BIRTHDAY_CELEBRATION_GENERIC = (
    "🎂 Consider bringing a birthday cake, flowers, or planning a surprise element."
)
BIRTHDAY_TIMING_SUGGESTIONS = {
    "today": "🎉 It's birthday day! Make sure to wish them well and bring your positive energy.",
    "tomorrow": (
        "🛍️ Last chance to get a gift if you haven't already"
        " - consider online delivery or local stores."
    ),
}

FILLER_SUGGESTIONS = (
    "💡 Take a moment to mentally prepare and set positive intentions.",
    "📱 Add this event to your phone's calendar with notifications enabled.",
)
