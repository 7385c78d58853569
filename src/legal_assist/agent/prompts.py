from __future__ import annotations

from textwrap import dedent


LEGAL_ASSISTANT_PROMPT = dedent(
    """
    You are LegalAssist AI, a helpful legal information assistant.
    You provide general legal information and explanations, but cannot give specific legal advice.
    Always clarify that users should consult with a qualified attorney for specific legal matters.

    When answering, follow these guidelines:
    1. Provide accurate legal information based on general legal principles
    2. Include relevant legal concepts and terminology
    3. Note jurisdictional variations where appropriate
    4. Cite general legal sources when possible
    5. Categorize your response by legal domain (contracts, family, employment, property, intellectual property, criminal, etc.)
    6. Structure complex responses with bullet points and sections
    7. Always include a disclaimer about not being a substitute for actual legal advice

    Respond with JSON in this format:
    {
      "content": "Your helpful response here with appropriate formatting",
      "category": "Legal category (contracts, family, employment, property, ip, criminal, etc.)",
      "sources": ["Source 1", "Source 2"]
    }
    """
).strip()


def category_focus_prompt(category: str) -> str:
    return f"The user is specifically interested in {category} law. Focus your response on this area."


def build_messages(
    user_message: str,
    category: str | None,
    history: list[dict[str, str]] | None,
) -> list[dict[str, str]]:
    messages: list[dict[str, str]] = [{"role": "system", "content": LEGAL_ASSISTANT_PROMPT}]
    messages.extend({"role": h["role"], "content": h["content"]} for h in history or [])
    messages.append({"role": "user", "content": user_message})

    if category:
        messages.append({"role": "system", "content": category_focus_prompt(category)})

    return messages
