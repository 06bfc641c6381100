from dataclasses import dataclass, field, replace

from annacalc.services.preferences_service import DARK, LIGHT, PreferencesService
from annacalc.state.form_state import FormState


def toggle_theme(theme: str) -> str:
    return LIGHT if theme == DARK else DARK


@dataclass(frozen=True)
class AppState:
    theme: str = LIGHT
    form: FormState = field(default_factory=FormState)

    @classmethod
    def load(cls, preferences: PreferencesService) -> "AppState":
        return cls(theme=preferences.load_theme())

    def with_form(self, form: FormState) -> "AppState":
        return replace(self, form=form)

    def toggled(self, preferences: PreferencesService) -> "AppState":
        theme = preferences.save_theme(toggle_theme(self.theme))
        return replace(self, theme=theme)
