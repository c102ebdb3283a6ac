from .models import InterpretationRequest

ANSWER_LINE = '- Question: "{question_text}"\n  -> Choice: "{chosen_option_text}" (axis: {axis}, score: {score})'

ARCHETYPE_PROMPT = """
You are an expert on the South Korean political landscape.
A respondent answered {answer_count} questions on political and social issues.

[SCORES] (0-100, 50 is neutral)
- Economy (0: welfare/distribution ~ 100: growth/market): {economy}
- Society (0: liberty ~ 100: order): {society}
- Diplomacy (0: autonomy ~ 100: alliance): {diplomacy}
- Approach (0: idealism ~ 100: realism): {approach}

[ANSWERS]
{answer_summary}

[TASK]
Analyse the respondent's political persona (archetype) and answer with these fields:

1. archetype: an intuitive, creative name of two to four words, like an MBTI type
   (e.g. "Cool-Headed Strategist", "Warm Reformer").
2. definition: one striking sentence that sums up who this type is.
   Example: "You are a cool-headed commander who does not hesitate to step in and fix an unstable market."
3. coreValues: exactly three values or beliefs this type cares about most, each written as "Keyword: content".
   Example: ["Top priority: fair distribution", "Principle: an active state", "Main worry: deepening inequality"]
4. unexpectedTrait: one sentence describing a surprising strength, weakness or twist that even
   like-minded people would recognise.
   Example: "Cool on the surface, but warmer than anyone towards the vulnerable."

Respond in JSON only.
"""


def build_archetype_prompt(request: InterpretationRequest) -> str:
    answer_summary = "\n".join(
        ANSWER_LINE.format(
            question_text=a.question_text,
            chosen_option_text=a.chosen_option_text,
            axis=a.axis.value,
            score=a.score,
        )
        for a in request.answers
    )
    scores = request.normalized_scores
    return ARCHETYPE_PROMPT.format(
        answer_count=len(request.answers),
        economy=scores.economy,
        society=scores.society,
        diplomacy=scores.diplomacy,
        approach=scores.approach,
        answer_summary=answer_summary,
    )
