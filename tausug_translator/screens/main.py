import logging
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.core.window import Window
from kivy.graphics import Color, Rectangle
from kivy.metrics import sp
from tausug_translator.models.state import AppState, StatusMessage
from tausug_translator.ui.widgets import StatusBar, notice_popup
from .translator import TranslatorScreen
from .dictionary import DictionaryScreen

logger = logging.getLogger(__name__)


class TranslatorRoot(TranslatorScreen, DictionaryScreen, BoxLayout):
    def __init__(self, session, tts=None, **kwargs):
        super().__init__(**kwargs)
        self.orientation = 'vertical'
        self.padding = 16
        self.spacing = 12

        self.theme = {
            "bg": (0.07, 0.08, 0.10, 1),
            "surface": (0.12, 0.14, 0.18, 1),
            "text": (0.95, 0.98, 1, 1),
            "muted": (0.78, 0.82, 0.88, 1),
            "primary": (0.20, 0.52, 0.90, 1),
            "success": (0.25, 0.65, 0.38, 1),
            "warning": (0.93, 0.65, 0.25, 1),
            "danger": (0.85, 0.32, 0.35, 1),
            "accent": (0.55, 0.32, 0.75, 1),
            "closeButton": (0.5, 0.5, 0.5, 1),
        }
        self.session = session
        self.settings = session.settings
        self.tts = tts
        self.state = AppState()
        self._controls = []
        self.sentences_popup = None

        with self.canvas.before:
            Color(*self.theme["bg"])
            self.rect = Rectangle(size=Window.size, pos=self.pos)
        self.bind(size=self._update_rect, pos=self._update_rect)

        self._build_ui()
        self._set_controls_enabled(False)
        self.status_bar.show(StatusMessage("Loading dictionary..."), hold=True)
        Window.bind(on_key_down=self._on_key_down)

    # ---- UI building ----
    def _build_ui(self):
        title = Label(text="Tausug Translator", font_size=sp(34), size_hint=(1, None), height=56, color=self.theme["text"])
        self.add_widget(title)
        self._build_translator_panel()
        self._build_dictionary_panel()
        self.status_bar = StatusBar(
            dismiss_after=self.settings.STATUS_DISMISS_SECONDS,
            size_hint=(1, None), height=40, font_size=sp(18), color=self.theme["text"],
        )
        self.add_widget(self.status_bar)

    def _update_rect(self, instance, value):
        self.rect.pos = instance.pos
        self.rect.size = instance.size

    def _register(self, *widgets):
        self._controls.extend(widgets)

    def _set_controls_enabled(self, enabled: bool):
        for w in self._controls:
            w.disabled = not enabled

    # ---- Startup ----
    def on_ready(self, messages):
        self.state.ready = True
        self._set_controls_enabled(True)
        self.refresh_stats()
        self.refresh_recent()
        for msg in messages:
            self.show_status(msg)
        stats = self.session.stats()
        logger.info("Translator ready, %d words", stats.total)

    # ---- Feedback ----
    def show_status(self, message: StatusMessage):
        self.status_bar.show(message)

    def show_notice(self, text: str):
        notice_popup(text)

    def _on_key_down(self, window, key, scancode, codepoint, modifiers):
        if key == 27:
            if self.sentences_popup is None:
                return False
            self.sentences_popup.dismiss()
            return True
        if key == 13 and ('ctrl' in modifiers or 'meta' in modifiers):
            # gesperrt, solange geladen wird
            if self.state.ready and not self.translate_btn.disabled:
                self.do_translate()
            return True
        return False
