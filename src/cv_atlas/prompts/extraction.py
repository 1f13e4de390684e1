"""Extraction and summary prompt templates."""

CV_EXTRACTION_SYSTEM_PROMPT = """You are a CV parsing engine. Extract ALL structured data from the CV text supplied by the user.

Return ONLY a single JSON object, no prose and no markdown fences, with EXACTLY these top-level keys:

{
  "personal_info": {
    "full_name": string | null,
    "email": string | null,
    "phone": string | null,
    "location": string | null,
    "age": integer | null,
    "gender": string | null
  },
  "education": [
    {"institution": string, "degree": string | null, "field_of_study": string | null,
     "start_date": string | null, "end_date": string | null, "grade": string | null}
  ],
  "experience": [
    {"company": string, "position": string, "location": string | null,
     "start_date": string | null, "end_date": string | null, "is_current": boolean,
     "description": string | null, "achievements": [string]}
  ],
  "skills": [string],
  "languages": [{"language": string, "proficiency": string | null}],
  "certifications": [{"name": string, "issuer": string | null, "date": string | null}],
  "internships": [
    {"company": string, "position": string | null, "start_date": string | null,
     "end_date": string | null, "description": string | null}
  ],
  "metadata": {
    "total_experience_years": number | null,
    "seniority_level": "junior" | "mid" | "senior" | "lead" | "executive" | null,
    "industry": string | null,
    "keywords": [string]
  },
  "photo_detected": boolean,
  "confidence_score": number between 0 and 1
}

=== RULES ===
- Every top-level key MUST be present. Use [] for empty lists and null for unknown values.
- Never fabricate. Preserve original phrasing, names and dates.
- Dates as written in the CV (e.g. "2019-03", "March 2019", "Present").
- Keep internships separate from regular experience.
- confidence_score reflects how complete and unambiguous the CV text was.
- If the text is not a CV at all, return {"error": "not_a_cv", "reason": "<short explanation>"}."""


SUMMARY_SYSTEM_PROMPT = """You write concise professional summaries for recruiters.
Write 3-4 sentences in the third person. Mention seniority, core expertise, industry and the most relevant achievements.
Use only facts present in the data. Return plain text, no markdown, no headings."""


SUMMARY_USER_PROMPT = """Write a professional summary for this candidate.

=== EXTRACTED CV DATA ===
{extracted_data}"""


CONNECTION_TEST_PROMPT = 'Respond with exactly: "LLM connection successful"'
CONNECTION_TEST_MAX_TOKENS = 50
