import os
import yaml
import keyring

APP_VERSION = "1.0.0"


class YamlConfig:
    """Load and save sheet settings to a YAML file.

    With ``ENCRYPT_SETTINGS=1`` the sheet credentials are kept in the OS
    keyring and only a placeholder is written to the file. Credentials
    missing from both fall back to environment variables.
    """

    SENSITIVE_KEYS = {
        "google_api_key",
        "sheet_id",
    }
    ENV_FALLBACKS = {
        "google_api_key": "GOOGLE_API_KEY",
        "sheet_id": "STRENGTHJOURNEYS_SHEET_ID",
    }

    def __init__(self, path: str = "settings.yaml") -> None:
        self.path = path
        self.encrypt = os.environ.get("ENCRYPT_SETTINGS") == "1"
        self.service = "strengthjourneys"

    def _read_file(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def load(self) -> dict:
        data = self._read_file()
        if self.encrypt:
            for key in self.SENSITIVE_KEYS & set(data):
                secret = keyring.get_password(self.service, key)
                if secret is not None:
                    data[key] = secret
                else:
                    data.pop(key)
        for key, env_name in self.ENV_FALLBACKS.items():
            if key not in data and os.environ.get(env_name):
                data[key] = os.environ[env_name]
        return data

    def save(self, data: dict) -> None:
        out = {k: v for k, v in data.items() if v is not None}
        if self.encrypt:
            for key in self.SENSITIVE_KEYS & set(out):
                keyring.set_password(self.service, key, str(out[key]))
                out[key] = True
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(out, f)
