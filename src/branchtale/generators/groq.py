"""AI content generator using LangChain and Groq."""

from typing import Any, Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import PromptTemplate
from langchain_groq import ChatGroq
from loguru import logger

from branchtale.errors import ContentGenerationError

DEFAULT_MODEL = "llama-3.1-8b-instant"

# Keep prompts within the model context window
MAX_DIFF_CHARS = 12000

# LLM prompt templates
BRANCH_NAME_TEMPLATE = """
Generate a short branch name based on the following git diff. The name should:
- Be descriptive but concise
- Use kebab-case (lowercase with hyphens)
- Be under 40 characters
- Not include any prefixes

{diff}

Return only the branch name, no additional text.
"""

PR_TITLE_TEMPLATE = """
Generate a concise and descriptive pull request title based on the following git diff.
The title should be in imperative mood, start with a verb, and be under 70 characters:

{diff}

Return only the title, no additional text.
"""

PR_DESCRIPTION_TEMPLATE = """
Generate a pull request description based on the following git diff.

Format the response in markdown:

{diff}
"""


def clean_output(text: str, single_line: bool = False) -> str:
    """Strip whitespace, code fences and wrapping quotes from an LLM answer."""
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")[1:]
        if lines and lines[-1].strip().startswith("```"):
            lines = lines[:-1]
        text = "\n".join(lines).strip()
    if single_line:
        text = text.split("\n", 1)[0].strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'`":
        text = text[1:-1].strip()
    return text


class GroqContentGenerator:
    """Generates branch names, titles and descriptions with a Groq-hosted model."""

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, llm: Optional[Any] = None):
        self.llm = llm or ChatGroq(groq_api_key=api_key, model=model, temperature=0.3)
        self.branch_name_chain = self._chain(BRANCH_NAME_TEMPLATE)
        self.title_chain = self._chain(PR_TITLE_TEMPLATE)
        self.description_chain = self._chain(PR_DESCRIPTION_TEMPLATE)

    def _chain(self, template: str):
        return PromptTemplate(template=template, input_variables=["diff"]) | self.llm | StrOutputParser()

    def generate_branch_name(self, diff: str) -> str:
        return clean_output(self._invoke(self.branch_name_chain, diff, "branch name"), single_line=True)

    def generate_pr_title(self, diff: str) -> str:
        return clean_output(self._invoke(self.title_chain, diff, "pull request title"), single_line=True)

    def generate_pr_description(self, diff: str) -> str:
        return clean_output(self._invoke(self.description_chain, diff, "pull request description"))

    def _invoke(self, chain, diff: str, what: str) -> str:
        if len(diff) > MAX_DIFF_CHARS:
            logger.debug(f"Truncating diff from {len(diff)} to {MAX_DIFF_CHARS} characters")
            diff = diff[:MAX_DIFF_CHARS]
        try:
            logger.debug(f"Generating {what}")
            return chain.invoke({"diff": diff})
        except Exception as e:
            logger.error(f"Error generating {what}: {str(e)}")
            raise ContentGenerationError(f"Failed to generate {what}: {e}") from e
