"""Generation — prompt assembly and the language-model client."""
