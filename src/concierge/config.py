from dynaconf import Dynaconf, Validator
import os

SMS_TRANSPORTS = ("console", "sms_proxy", "twilio")

settings = Dynaconf(
    envvar_prefix=False,
    settings_files=[
        os.path.join(os.path.dirname(__file__), "settings.json"),
    ],
    load_dotenv=True,
    merge_enabled=True,
    validators=[
        Validator("memory_depth", default=3, gte=1),
        Validator("sms.transport", default="console", is_in=SMS_TRANSPORTS),
        Validator("llm.model", must_exist=True),
    ],
)
