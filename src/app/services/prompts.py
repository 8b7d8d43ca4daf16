"""
프롬프트 템플릿.

- 템플릿 문자열은 여기서만 관리
- 유저 입력은 build_* 함수 인자로만 주입
"""

from src.domain.schemas import QuestionResult, UserProfile

INSIGHTS_PROMPT = """
Analyze the current state of the {industry} industry and provide insights in ONLY the following JSON format without any additional notes or explanations:
{{
  "salaryRanges": [
    {{ "role": "string", "min": number, "max": number, "median": number, "location": "string" }}
  ],
  "growthRate": number,
  "demandLevel": "High" | "Medium" | "Low",
  "topSkills": ["skill1", "skill2"],
  "marketOutlook": "Positive" | "Neutral" | "Negative",
  "keyTrends": ["trend1", "trend2"],
  "recommendedSkills": ["skill1", "skill2"]
}}

IMPORTANT: Return ONLY the JSON. No additional text, notes, or markdown formatting.
Include at least 5 common roles for salary ranges.
Growth rate should be a percentage.
Include at least 5 skills and trends.
"""

COVER_LETTER_PROMPT = """
Write a professional cover letter for a {job_title} position at {company_name}.

About the candidate:
- Industry: {industry}
- Years of Experience: {experience}
- Skills: {skills}
- Professional Background: {bio}

Job Description:
{job_description}

Requirements:
1. Use a professional, enthusiastic tone
2. Highlight relevant skills and experience
3. Show understanding of the company's needs
4. Keep it concise (max 400 words)
5. Use proper business letter formatting in markdown
6. Include specific examples of achievements
7. Relate candidate's background to job requirements

Format the letter in markdown.
"""

QUIZ_PROMPT = """
Generate {count} technical interview questions for a {industry} professional{expertise}.

Each question should be multiple choice with 4 options.

Return the response in this JSON format only, no additional text:
{{
  "questions": [
    {{
      "question": "string",
      "options": ["string", "string", "string", "string"],
      "correctAnswer": "string",
      "explanation": "string"
    }}
  ]
}}
"""

IMPROVEMENT_TIP_PROMPT = """
The user got these interview questions wrong:

{wrong_questions}

Give a short 1-2 sentence improvement tip.
Encourage the user. Do NOT restate the questions.
"""

RESUME_IMPROVE_PROMPT = """
As an expert resume writer, improve the following {section} description for a {industry} professional.
Make it more impactful, quantifiable, and aligned with industry standards.
Current content: "{current}"

Requirements:
1. Use action verbs
2. Include metrics and results where possible
3. Highlight relevant technical skills
4. Keep it concise but detailed
5. Focus on achievements over responsibilities
6. Use industry-specific keywords

Format the response as a single paragraph without any additional text or explanations.
"""


def build_insights_prompt(industry: str) -> str:
    return INSIGHTS_PROMPT.format(industry=industry)


def build_cover_letter_prompt(
    profile: UserProfile,
    job_title: str,
    company_name: str,
    job_description: str,
) -> str:
    return COVER_LETTER_PROMPT.format(
        job_title=job_title,
        company_name=company_name,
        industry=profile.industry,
        experience=profile.experience if profile.experience is not None else "N/A",
        skills=", ".join(profile.skills),
        bio=profile.bio or "",
        job_description=job_description,
    )


def build_quiz_prompt(profile: UserProfile, count: int) -> str:
    expertise = ""
    if profile.skills:
        expertise = f" with expertise in {', '.join(profile.skills)}"
    return QUIZ_PROMPT.format(
        count=count,
        industry=profile.industry,
        expertise=expertise,
    )


def build_improvement_tip_prompt(wrong_answers: list[QuestionResult]) -> str:
    wrong_questions = "\n\n".join(
        f'Question: "{q.question}"\n'
        f'Correct Answer: "{q.answer}"\n'
        f'User Answer: "{q.user_answer}"'
        for q in wrong_answers
    )
    return IMPROVEMENT_TIP_PROMPT.format(wrong_questions=wrong_questions)


def build_resume_improve_prompt(profile: UserProfile, current: str, section: str) -> str:
    return RESUME_IMPROVE_PROMPT.format(
        section=section,
        industry=profile.industry,
        current=current,
    )
