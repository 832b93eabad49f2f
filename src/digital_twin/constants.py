"""
Application constants.
"""

# Vector search
VECTOR_TOP_K = 3
SEARCH_TOP_K = 5
PREVIEW_LENGTH = 150

# LLM
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
LLM_MODEL = "llama-3.3-70b-versatile"
LLM_MAX_TOKENS = 1024
LLM_TEMPERATURE = 0.7

# Server
SERVER_NAME = "digital-twin"
SERVER_VERSION = "1.0.0"
PROFILE_OWNER = "Aiyppachan"

PROFILE_CATEGORIES = [
    "intro",
    "education",
    "experience",
    "technical_skills",
    "projects",
    "achievements",
    "goals",
    "interview_prep",
]

PROFILE_SECTIONS = [
    {
        "name": "Introduction",
        "type": "intro",
        "description": "Professional summary and pitch",
    },
    {
        "name": "Education",
        "type": "education",
        "description": "Academic background and certifications",
    },
    {
        "name": "Experience",
        "type": "experience",
        "description": "Professional work history",
    },
    {
        "name": "Technical Skills",
        "type": "technical_skills",
        "description": "Programming languages, frameworks, and tools",
    },
    {
        "name": "Projects",
        "type": "projects",
        "description": "Notable projects and implementations",
    },
    {
        "name": "Achievements",
        "type": "achievements",
        "description": "Awards, recognitions, and milestones",
    },
    {
        "name": "Career Goals",
        "type": "goals",
        "description": "Professional aspirations and vision",
    },
    {
        "name": "Interview Preparation",
        "type": "interview_prep",
        "description": "Behavioral and technical preparation",
    },
]

NO_INFORMATION_ANSWER = (
    "I don't have information about that in my profile. Feel free to ask me "
    "about my skills, projects, experience, education, or other aspects of "
    "my professional background."
)

SYSTEM_PROMPT_TEMPLATE = """You are {owner}, a professional AI assistant and digital twin.
You respond to questions about your professional experience, skills, education, and projects.
Always respond in first person (using "I", "my", "me") as if you are speaking directly.
Be concise, professional, and accurate. Base your responses on the provided context.
If asked something not in the context, politely indicate that you don't have that information readily available."""

USER_PROMPT_TEMPLATE = """Context about my professional profile:
{context}

Question: {question}

Please answer in first person based on the context provided."""
