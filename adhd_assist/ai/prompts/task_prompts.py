"""
Task Prompts - templates for the four task AI operations.

Each operation has three parts:
- a ROLE prompt (system message for OpenAI, first user turn for Gemini)
- an ACK (the model's priming reply, used by the Gemini chat history)
- a TEMPLATE for the actual request, filled with str.format()

Every template demands JSON only. Literal braces are doubled for format().
"""

# ---------------------------------------------------------------------------
# TASK BREAKDOWN
# ---------------------------------------------------------------------------

BREAKDOWN_ROLE_PROMPT = (
    "You are an ADHD coach and task management expert who helps break down "
    "tasks into manageable steps."
)

BREAKDOWN_ACK = (
    "I'm ready to help you break down tasks into manageable steps. As an ADHD "
    "coach, I understand how important it is to structure complex tasks into "
    "concrete, actionable steps."
)

BREAKDOWN_TEMPLATE = """I need help breaking down a task for someone with ADHD. The task is "{title}" and the person's current energy level is {energy_level}.

Please analyze this task and:
1. Determine a priority level (high, medium, or low)
2. Break it down into 3-5 clear, actionable, sequential steps
3. Estimate how long the total task will take (in minutes)
4. Estimate how long each step will take (in minutes)
5. Provide a brief description for the task

Return ONLY a JSON object with this structure:
{{
  "priority": "high|medium|low",
  "estimatedDuration": number,
  "description": "brief description of task",
  "steps": [
    {{
      "description": "clear step instruction",
      "estimatedDuration": number
    }}
  ]
}}

IMPORTANT: Your response must be valid JSON format only, with no additional text.
Keep the steps concrete, specific, and actionable. If the energy level is low, make the steps even smaller and more manageable."""


# ---------------------------------------------------------------------------
# DAILY FOCUS
# ---------------------------------------------------------------------------

FOCUS_ROLE_PROMPT = (
    "You are an ADHD coach and productivity expert who helps me prioritize "
    "my daily tasks."
)

FOCUS_ACK = (
    "I'm here to help you as an ADHD coach to effectively prioritize your "
    "tasks. I understand how important it is to find the right focus for your "
    "energy and situation."
)

FOCUS_TEMPLATE = """I need help selecting the TOP 3 tasks I should focus on today.
My current energy level is: {energy_level}.
Today is: {today}.

Here are my uncompleted tasks (in JSON format):
{tasks_json}

Please select the 3 most important tasks I should focus on today, based on:
1. Priority (high priority should generally be preferred)
2. Matching my energy level (tasks should match my current energy level)
3. Due dates (tasks due soon should be prioritized)
4. Estimated duration (consider what's realistically achievable today)

For each recommended task, please provide a brief reason why it was selected.
Also include a short, motivational message for my day.

Reply ONLY with a valid JSON object in this format:
{{
  "topTasks": [
    {{
      "taskId": number,
      "reason": "brief explanation of why this task was selected"
    }}
  ],
  "motivationalMessage": "short, encouraging message"
}}

Include a maximum of 3 tasks, or fewer if fewer are available. Only use taskId values from the list above."""


# ---------------------------------------------------------------------------
# EMOJI PREDICTION
# ---------------------------------------------------------------------------

EMOJI_ROLE_PROMPT = "You are an expert in categorizing tasks with appropriate emojis."

EMOJI_ACK = (
    "I'm ready to analyze any task and suggest suitable emojis that best "
    "represent the content or context of the task."
)

EMOJI_TEMPLATE = """Task title: "{title}"
{description_line}
Analyze this task and suggest 5 suitable emojis that best represent the content or context of the task.
The emojis should help the user quickly recognize what the task is about.

Return ONLY a JSON array with 5 emojis, without additional text or explanations.

Example:
["📝", "📚", "🎓", "📊", "💻"]

Your answer:"""


# ---------------------------------------------------------------------------
# NATURAL LANGUAGE TASK ANALYSIS
# ---------------------------------------------------------------------------

NLP_ROLE_PROMPT = (
    "You are an expert in task management and natural language processing who "
    "helps convert unstructured task descriptions into structured data."
)

NLP_ACK = (
    "I'm ready to analyze natural language task descriptions and extract "
    "structured information from them. I will identify the key details and "
    "return them in a consistent format."
)

NLP_TEMPLATE = """Analyze the following natural language task description and extract structured information from it:

"{text}"

Today is {today}.
Extract the following information from the description:

1. A clear title for the task (short and concise)
2. A more detailed description (optional, can be null)
3. The priority of the task (high, medium, low)
4. The required energy level (high, medium, low, or null if not discernible)
5. The due date in YYYY-MM-DD format (or null if none specified)
6. The category of the task ({categories})
7. The estimated duration in minutes (or null if not discernible)

Return YOUR ANSWER ONLY as a valid JSON object in the following format:
{{
  "title": "Clear task title",
  "description": "More detailed description or null",
  "priority": "high|medium|low",
  "energyLevel": "high|medium|low|null",
  "dueDate": "YYYY-MM-DD|null",
  "category": "{category_choices}",
  "estimatedDuration": number|null
}}

IMPORTANT: Interpret relative time references (like "tomorrow", "next week", "in three days")
relative to today's date. Today is {today}.
If a task has no clear category, choose the most likely one based on context."""
