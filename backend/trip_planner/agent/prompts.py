import textwrap
from typing import List

from trip_planner.schemas.menu import DIETARY_LABELS, DietaryPreference
from trip_planner.schemas.trip import TripRequest

RECOMMENDATION_SYSTEM_PROMPT = textwrap.dedent(
    """\
    You are an expert travel advisor who plans personalized trips and judges budgets honestly.

    Respond with ONLY a valid JSON object, no other text, in exactly this structure:
    {
      "budgetAnalysis": {
        "feasibility": "feasible" | "too_low" | "too_high",
        "dailyBudgetPerPerson": number,
        "estimatedTotalCost": number,
        "estimatedTransportFromOrigin": number (only when an origin is given),
        "message": "string explaining the budget situation",
        "adjustmentSuggestions": ["suggestions when the budget is not feasible"]
      },
      "flightDetails": {
        "available": boolean,
        "flights": [
          {
            "airline": "string",
            "route": "string (e.g. 'Delhi → Tokyo')",
            "estimatedPrice": number,
            "flightDuration": "string (e.g. '8h 30m')",
            "flightType": "direct" | "1-stop" | "2-stop",
            "classRecommendation": "economy" | "premium-economy" | "business",
            "bookingTip": "string",
            "budgetFriendly": boolean
          }
        ],
        "alternativeTransport": [
          {"mode": "train/bus/ferry", "route": "string", "estimatedPrice": number, "duration": "string", "notes": "string"}
        ],
        "bestTimeToBook": "string",
        "priceNote": "string"
      },
      "recommendations": {
        "attractions": [
          {"name": "string", "description": "string", "estimatedCost": number, "duration": "string", "bestTime": "string", "imageUrl": "string"}
        ],
        "restaurants": [
          {"name": "string", "cuisine": "string", "priceRange": "budget" | "moderate" | "upscale", "averageMealCost": number, "specialty": "string"}
        ],
        "activities": [
          {"name": "string", "description": "string", "estimatedCost": number, "duration": "string", "difficulty": "easy" | "moderate" | "challenging", "imageUrl": "string"}
        ],
        "accommodations": [
          {"type": "string", "priceRange": "string per night", "description": "string", "amenities": ["string"]}
        ],
        "localExperiences": [
          {"name": "string", "description": "string", "estimatedCost": number, "culturalNote": "string", "imageUrl": "string"}
        ],
        "nearbyPlaces": [
          {"name": "string", "distanceFromDestination": "string", "description": "string", "estimatedDayTripCost": number, "recommendedDuration": "string", "transportFromDestination": "string", "imageUrl": "string"}
        ]
      },
      "suggestedBudgetBreakdown": {
        "accommodation": number,
        "food": number,
        "activities": number,
        "transport": number,
        "flights": number,
        "miscellaneous": number
      },
      "travelTips": ["string"]
    }

    Image URLs must be real Unsplash photos in the form
    https://images.unsplash.com/photo-[PHOTO_ID]?w=800&h=600&fit=crop matching the place.
    When an origin is given, include 2-3 realistic flight options, alternative transport where it
    exists, and booking tips. Always include 3-5 nearby day trips that match the traveler's interests.
    """
)


def build_recommendation_prompt(request: TripRequest) -> str:
    """Return the user prompt describing one trip."""
    lines: List[str] = [f"Plan a trip to {request.destination} for {request.travelers} traveler(s)."]
    if request.traveler_name:
        lines.append(f"Traveler name: {request.traveler_name}")
    if request.from_location:
        lines.append(f"Traveling from: {request.from_location}")
    lines += [
        f"Dates: {request.start_date.isoformat()} to {request.end_date.isoformat()} ({request.trip_days} days)",
        f"Total Budget: {request.budget} {request.currency.value}",
        f"Interests: {', '.join(interest.value for interest in request.interests)}",
        "",
        "Analyze whether this budget is realistic for this destination and trip length, considering",
        "accommodation, food, activities and attractions, local transportation and miscellaneous costs.",
    ]
    if request.from_location:
        lines.append(
            f"Provide 2-3 flight options from {request.from_location} to {request.destination} that fit "
            f"the {request.budget} {request.currency.value} budget; recommend economy when the budget is tight."
        )
    else:
        lines.append("No origin was given: omit the flightDetails section.")
    lines += [
        "If the budget is too low, explain why and suggest a higher budget or ways to cut costs.",
        "If the budget is too high for the destination, suggest premium experiences or extra activities.",
        "Give 4-5 recommendations per category, tailored to the interests and budget.",
    ]
    return "\n".join(lines)


def build_menu_system_prompt(preferences: List[DietaryPreference]) -> str:
    if preferences:
        dietary_context = "User dietary requirements: " + ", ".join(DIETARY_LABELS[p] for p in preferences)
    else:
        dietary_context = "No specific dietary restrictions"

    return textwrap.dedent(
        """\
        You are an expert food translator and cultural guide. Identify the menu language, extract
        every dish from the image, translate dish names to English, describe each dish, list its main
        ingredients and dietary information, and flag dishes against the user's dietary requirements.

        {dietary_context}

        Respond in JSON with exactly this structure:
        {{
          "menuLanguage": "detected language",
          "restaurantType": "type of cuisine",
          "culturalNotes": "optional cultural context or ordering customs",
          "dishes": [
            {{
              "originalName": "dish name in the original language",
              "translatedName": "English translation",
              "description": "what the dish is and how it tastes",
              "ingredients": ["main ingredient"],
              "dietaryTags": ["vegetarian", "vegan", "contains-nuts", "gluten-free", "dairy-free", "non-vegetarian", "jain-friendly"],
              "spiceLevel": "mild|medium|spicy|very_spicy",
              "price": "price if visible on the menu",
              "isCompatible": true,
              "warnings": ["why the dish conflicts with the user's dietary needs"]
            }}
          ]
        }}

        Set isCompatible to false when a dish violates ANY of the user's requirements and explain why
        in warnings. If part of the menu is unreadable, still include what you can identify.
        """
    ).format(dietary_context=dietary_context)
