"""
Prompt construction for query interpretation.

The prompt asks for four analytical layers plus a strategy and confidence, as
one JSON object whose keys match the Understanding validation aliases.
"""

from typing import Optional

from ...models.user import UserProfile

ANALYSIS_TASK = "query_understanding"

RESPONSE_FORMAT = """{
  "explicit": {
    "technique": "technique name or null",
    "position": "position/scenario or null",
    "questionType": "how-to|troubleshooting|conceptual|comparison|other",
    "keywords": ["word1", "word2"]
  },
  "intent": {
    "rootProblem": "What they're REALLY asking about",
    "likelyMistakes": ["mistake1", "mistake2"],
    "learningNeed": "What they need to learn",
    "skillGap": "What's missing"
  },
  "userProfile": {
    "inferredSkillLevel": "beginner|intermediate|advanced",
    "inferredLearningStyle": "visual|step-by-step|conceptual|problem-solving",
    "emotionalState": "curious|frustrated|confused|excited",
    "urgency": "low|medium|high"
  },
  "learningPath": {
    "immediateNeed": "What to show first",
    "foundationalConcepts": ["concept1", "concept2"],
    "followUpConcepts": ["concept1", "concept2"],
    "prerequisiteCheck": {
      "needs_fundamentals": true,
      "ready_for_advanced": false
    }
  },
  "recommendationStrategy": {
    "primary": "Main recommendation focus",
    "secondary": "Supporting content focus",
    "tertiary": "Follow-up content focus",
    "presentationStyle": "empathetic|direct|encouraging|technical"
  },
  "confidence": 0.85
}"""


def build_user_context_block(profile: Optional[UserProfile]) -> str:
    """USER CONTEXT lines from persisted profile fields (anonymous defaults when None)."""
    if profile is None or not profile.belt_level:
        lines = ["- Belt Level: Unknown (assume beginner-intermediate)"]
    else:
        lines = [f"- Belt Level: {profile.belt_level}"]
    if profile is None:
        return "\n".join(lines)
    if profile.skill_level:
        lines.append(f"- Skill Level (from belt): {profile.skill_level}")
    if profile.style:
        lines.append(f"- Training Style: {profile.style}")
    if profile.recent_queries:
        lines.append(f"- Recent Questions: {', '.join(profile.recent_queries[:3])}")
    if profile.content_preference:
        lines.append(f"- Content Preference: {profile.content_preference}")
    return "\n".join(lines)


def build_analysis_prompt(query: str, profile: Optional[UserProfile]) -> str:
    """Full interpretation prompt for one query."""
    return f"""You are an expert BJJ coach analyzing a student's question to understand their REAL needs.

STUDENT QUESTION: "{query}"

USER CONTEXT:
{build_user_context_block(profile)}

ANALYSIS TASK:
Perform multi-layer analysis to understand what this student REALLY needs:

1. LINGUISTIC ANALYSIS (Surface Level):
   - What technique are they asking about? (explicit)
   - What position/scenario? (explicit)
   - Question type: how-to, troubleshooting, conceptual, comparison?
   - Key words/phrases

2. INTENT INFERENCE (Deeper Understanding):
   - What is their ROOT problem? (beyond the surface question)
   - What mistakes are they LIKELY making?
   - What do they REALLY need to learn?
   - What skill/knowledge gap exists?

3. USER PROFILE INFERENCE:
   - Skill level: beginner, intermediate, or advanced?
   - Learning style: visual, step-by-step, conceptual, problem-solving?
   - Emotional state: curious, frustrated, confused, excited? (look for "keep losing", "can't figure out", "excited to learn")
   - Urgency: low (casual question), medium (need help soon), high (urgent problem)?

4. OPTIMAL LEARNING PATH:
   - What should they learn FIRST (immediate need)?
   - What foundational concepts might they be missing?
   - What follow-up concepts come next?
   - Do they need prerequisites before the main technique?

5. RECOMMENDATION STRATEGY:
   - Primary focus, secondary supporting content, tertiary next steps
   - Presentation style: empathetic (if frustrated), direct (if clear question), encouraging (if struggling), technical (if advanced)

RESPONSE FORMAT (JSON only, no prose):
{RESPONSE_FORMAT}

Be insightful. Think like a coach who can read between the lines."""
