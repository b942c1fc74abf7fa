from abc import ABC, abstractmethod


class TextGenerationServiceInterface(ABC):
    @abstractmethod
    async def generate(self, prompt: str, system_prompt: str = None) -> str:
        """
        Sends a prompt to the language model and returns the generated text.

        :param prompt: The user prompt
        :param system_prompt: Optional instruction that frames the answer format
        :return: The raw generated text. Callers validate it, the output is untrusted.
        """
        pass
