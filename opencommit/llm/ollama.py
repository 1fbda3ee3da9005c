"""Ollama LLM Client for Local Models"""

import http.client
import json
import os
import socket
import urllib.error
import urllib.request

from opencommit.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT


class OllamaClient(LLMClient):
    """Ollama client for local models. Requires: ollama serve"""

    DEFAULT_MODEL = "mistral:7b"
    DEFAULT_HOST = "http://localhost:11434"
    DEFAULT_TIMEOUT = 300  # CPU inference is slow

    def __init__(self, model: str | None = None, host: str | None = None):
        self.model = model or self.DEFAULT_MODEL
        self.host = host or os.environ.get("OLLAMA_HOST", self.DEFAULT_HOST)
        self.timeout = self._read_timeout()
        self._verify_connection()

    def _read_timeout(self) -> int:
        raw = os.environ.get("OC_TIMEOUT")
        if raw is None:
            return self.DEFAULT_TIMEOUT
        try:
            timeout = int(raw)
        except ValueError:
            timeout = 0
        if timeout <= 0:
            raise LLMError(f"Invalid OC_TIMEOUT '{raw}'. Use a whole number of seconds, e.g. export OC_TIMEOUT=600")
        return timeout

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    def _verify_connection(self) -> None:
        """Check if Ollama is running and accessible."""
        try:
            req = urllib.request.Request(f"{self.host}/api/tags")
            with urllib.request.urlopen(req, timeout=5):
                pass
        except (urllib.error.URLError, OSError):
            raise LLMError("Ollama not running. Start with: ollama serve")

    def _call_api(self, prompt: str) -> dict:
        url = f"{self.host}/api/generate"
        payload = {
            "model": self.model,
            "prompt": prompt,
            "system": SYSTEM_PROMPT,
            "stream": False,
            "keep_alive": "10m",
            "options": {
                "temperature": 0.4,
                "num_predict": 1000,
            }
        }

        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})

        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def _request(self, prompt: str) -> LLMResponse:
        timeout_hint = f"Request timed out after {self.timeout}s. Increase timeout: export OC_TIMEOUT=600"
        try:
            result = self._call_api(prompt)
        except urllib.error.HTTPError as e:
            if e.code == 404:
                raise LLMError(f"Model '{self.model}' not found. Run: ollama pull {self.model}")
            raise LLMError(f"Ollama error ({e.code}): {e.reason}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise LLMError(timeout_hint)
            if "Connection refused" in str(e):
                raise LLMError("Ollama not running. Start with: ollama serve")
            raise LLMError(f"Ollama request failed: {e}")
        except socket.timeout:
            raise LLMError(timeout_hint)
        except json.JSONDecodeError:
            raise LLMError("Invalid response from Ollama. Try a different model or simpler change.")
        except http.client.HTTPException as e:
            raise LLMError(f"Incomplete response from Ollama: {e}. The model may have run out of memory.")
        except OSError as e:
            raise LLMError(f"Connection to Ollama lost: {e}. Check that 'ollama serve' is still running.")

        return LLMResponse(
            content=result.get("response", "").strip(),
            model=self.model,
            tokens_used=result.get("eval_count", 0)
        )
