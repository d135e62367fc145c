"""Fixed prompt and message texts used by the routine advisor."""

SYSTEM_PROMPT = """
You are a L'Oréal skincare and beauty advisor. Using ONLY the selected products,
build a practical, safe daily routine. Include AM/PM steps, frequency, and short
reasoning. Avoid recommending outside products. Keep it concise and professional.
""".strip()

GENERATE_REQUEST = "Generate a skincare routine for my selected products."
EMPTY_SELECTION_GUIDANCE = "Please select at least one product before generating a routine."

ROUTINE_PENDING = "Building your personalized routine..."
ROUTINE_FALLBACK = "Sorry, I couldn’t generate a routine right now."
ROUTINE_TRANSPORT_ERROR = "Error connecting to the AI. Please check your Worker URL."

CHAT_PENDING = "Thinking..."
CHAT_FALLBACK = "Sorry, I couldn’t find an answer."
CHAT_TRANSPORT_ERROR = "Error connecting to AI. Check your Worker setup."
