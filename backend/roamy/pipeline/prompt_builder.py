import textwrap

from roamy.models.trip_request import TripRequest

PERSONA = (
    "You are an expert travel planning assistant with deep knowledge of destinations worldwide. "
    "Your task is to generate a comprehensive, detailed travel itinerary in valid JSON format that "
    "gives travelers everything they need for an unforgettable trip."
)

_ACTIVITY_SCHEMA = """\
        {
          "time": "string (e.g., '09:00 AM')",
          "title": "string (activity name)",
          "description": "string (what to expect)",
          "location": "string (specific address or area)",
          "cost": "string, optional (e.g., '$25 per person')",
          "duration": "string (e.g., '2 hours')",
          "special_features": ["string, optional"],
          "tips": "string, optional (practical tips)",
          "booking_info": "string, optional (if advance booking is needed)"
        }"""

ITINERARY_SCHEMA = textwrap.dedent(
    """\
    {
      "trip_overview": {
        "destination": "string (required)",
        "dates": "string (required, human-readable date range)",
        "duration": "string (required, e.g., '5 days')",
        "budget_level": "string (required)",
        "accommodation": "string (required)",
        "travelers": "string (required)",
        "dietary_plan": "string (required)"
      },
      "itinerary": [
        {
          "day": number,
          "day_title": "string (e.g., 'Arrival & City Introduction')",
          "day_description": "string (brief overview of the day)",
          "highlights": ["string"],
          "total_estimated_cost": "string (e.g., '$150-200')",
          "morning": [
    %(activity)s
          ],
          "afternoon": [ same shape as morning ],
          "evening": [ same shape as morning ],
          "meals": [
            {
              "time": "string (e.g., '12:30 PM')",
              "restaurant_name": "string",
              "cuisine_type": "string (e.g., 'Local Italian')",
              "location": "string (restaurant address)",
              "cost_range": "string (e.g., '$15-25 per person')",
              "must_try_dishes": ["string"],
              "reservation_required": boolean,
              "special_features": ["string, optional"],
              "tips": "string, optional"
            }
          ]
        }
      ],
      "additional_info": {
        "weather_forecast": "string",
        "packing_tips": ["string"],
        "local_currency": {"code": "string", "exchangeRate": number},
        "transportation": ["string"],
        "emergency": {"police": "string", "ambulance": "string", "touristPolice": "string, optional"},
        "local_customs": ["string, optional"],
        "best_times_to_visit": ["string, optional"],
        "money_saving_tips": ["string, optional"],
        "cultural_etiquette": ["string, optional"],
        "local_phrases": ["string, optional"],
        "must_know_facts": ["string, optional"]
      }
    }"""
) % {"activity": _ACTIVITY_SCHEMA}

CONTENT_REQUIREMENTS = [
    "Return ONLY the JSON object. No code fences, Markdown, or explanations before or after it.",
    "The JSON must match the structure above exactly; every field marked required must be present and non-empty.",
    "Include exactly one entry in \"itinerary\" for each day of the trip, numbered from 1.",
    "Each day must include 2-3 activities per time slot (morning, afternoon, evening) with realistic timing.",
    "Add 2-3 meal recommendations per day with specific restaurants and must-try dishes.",
    "All meals must respect the stated dietary restriction.",
    "Cost estimates must match the stated budget level.",
    "Activities must suit the stated traveler group.",
    "Provide specific addresses or clear location descriptions.",
    "Mix popular attractions, hidden gems, and local experiences, with weather-appropriate choices.",
    "Include booking information where advance reservations are recommended.",
    "Include cultural insights, etiquette, money-saving tips, and useful local phrases.",
]


def _trip_details(request: TripRequest) -> str:
    lines = [
        f"- Destination: {request.destination}",
        f"- Dates: {request.date_range_label} ({request.trip_days} days)",
        f"- Budget Level: {request.budget}",
        f"- Accommodation: {request.accommodation}",
        f"- Travelers: {request.travelers}",
        f"- Dietary Preferences: {request.dietary_plan}",
    ]
    notes = (request.notes or "").strip()
    if notes:
        lines.append(f"- Traveler Preferences: {notes}")
    return "\n".join(lines)


def build_prompt(request: TripRequest) -> str:
    """Return the generation prompt for a trip request.

    Only the trip-details block varies between calls; the persona, schema and
    requirements are fixed.
    """
    requirements = "\n".join(f"{i}. {rule}" for i, rule in enumerate(CONTENT_REQUIREMENTS, start=1))
    return (
        f"{PERSONA}\n\n"
        f"The JSON must follow this structure:\n{ITINERARY_SCHEMA}\n\n"
        f"Trip details to use:\n{_trip_details(request)}\n\n"
        f"Requirements:\n{requirements}\n"
    )
