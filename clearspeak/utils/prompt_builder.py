from __future__ import annotations

import json

from clearspeak.schemas.message import MAX_SUGGESTIONS, TONE_LABELS

CONTEXT_RULES: dict[str, str] = {
    "boss": "Keep it concise, outcome-focused, respectful. Surface risks, decisions and deadlines.",
    "client": "Be courteous and service-oriented. Reduce friction, confirm next steps and deadlines.",
    "colleague": "Be collaborative and specific. Offer help or options. Avoid blame.",
    "friend": "Be warm and informal but still clear. Keep it short.",
}
DEFAULT_CONTEXT = "colleague"


def context_rules(context: str) -> str:
    return CONTEXT_RULES.get(context, CONTEXT_RULES[DEFAULT_CONTEXT])


def build_rewrite_prompt(text: str, tone: str = "neutral", context: str = DEFAULT_CONTEXT) -> str:
    prompt = f"""
You are ClearSpeak, an assistant that rewrites business messages.

GOAL:
- Rewrite the user's message to be clear, concise, professional.
- Tone: {tone}.
- Context: {context}. Guidelines: {context_rules(context)}

HARD RULES:
- Preserve meaning and intent.
- Keep it short. Avoid fluff.
- Return ONLY the rewritten text. No preface or extra quotes.

USER MESSAGE:
\"\"\"{text}\"\"\"
""".strip()
    return prompt


def build_analyze_prompt(text: str, context: str = DEFAULT_CONTEXT) -> str:
    tones_json = json.dumps(list(TONE_LABELS))
    prompt = f"""
Analyze the following message.

Return STRICT JSON with:
{{
  "tone": one of {tones_json},
  "score": integer 0..100,
  "suggestions": [exactly {MAX_SUGGESTIONS} short, actionable tips]
}}

Consider context="{context}".

TEXT:
\"\"\"{text}\"\"\"
""".strip()
    return prompt
