from kivy.uix.boxlayout import BoxLayout
from kivy.uix.gridlayout import GridLayout
from kivy.uix.scrollview import ScrollView
from kivy.uix.label import Label
from kivy.uix.spinner import Spinner
from kivy.uix.textinput import TextInput
from kivy.core.clipboard import Clipboard
from tausug_translator.errors import TranslatorError
from tausug_translator.models.state import AUTO, ENGLISH, TAUSUG, NOT_FOUND_TEXT, StatusMessage, language_label
from tausug_translator.ui.widgets import RoundedButton as Button

SOURCE_CHOICES = (AUTO, TAUSUG, ENGLISH)
TARGET_CHOICES = (ENGLISH, TAUSUG)


def _code_for(label: str) -> str:
    for code in SOURCE_CHOICES:
        if language_label(code) == label:
            return code
    return AUTO


class TranslatorScreen:
    def _build_translator_panel(self):
        lang_row = BoxLayout(size_hint=(1, None), height=56, spacing=8)
        self.source_spinner = Spinner(text=language_label(self.state.source_language),
                                      values=[language_label(c) for c in SOURCE_CHOICES], font_size=22)
        self.swap_btn = Button(text="<->", size_hint=(None, 1), width=90, font_size=22, background_color=self.theme["surface"])
        self.target_spinner = Spinner(text=language_label(self.state.target_language),
                                      values=[language_label(c) for c in TARGET_CHOICES], font_size=22)
        self.source_spinner.bind(text=lambda inst, val: setattr(self.state, "source_language", _code_for(val)))
        self.target_spinner.bind(text=lambda inst, val: setattr(self.state, "target_language", _code_for(val)))
        self.swap_btn.bind(on_release=self.swap_languages)
        lang_row.add_widget(self.source_spinner)
        lang_row.add_widget(self.swap_btn)
        lang_row.add_widget(self.target_spinner)
        self.add_widget(lang_row)

        text_row = BoxLayout(size_hint=(1, 0.22), spacing=8)
        in_box = BoxLayout(orientation='vertical')
        self.input_text = TextInput(hint_text="Enter a word", multiline=True, font_size=28)
        self.input_count = Label(text="0", size_hint=(1, None), height=24, font_size=16, color=self.theme["muted"], halign='right')
        self.input_text.bind(text=lambda inst, val: setattr(self.input_count, "text", str(len(val))))
        in_box.add_widget(self.input_text)
        in_box.add_widget(self.input_count)
        out_box = BoxLayout(orientation='vertical')
        self.output_text = TextInput(hint_text="Translation", multiline=True, readonly=True, font_size=28)
        self.output_count = Label(text="0", size_hint=(1, None), height=24, font_size=16, color=self.theme["muted"], halign='right')
        self.output_text.bind(text=lambda inst, val: setattr(self.output_count, "text", str(len(val))))
        out_box.add_widget(self.output_text)
        out_box.add_widget(self.output_count)
        text_row.add_widget(in_box)
        text_row.add_widget(out_box)
        self.add_widget(text_row)

        actions = BoxLayout(size_hint=(1, None), height=60, spacing=8)
        self.translate_btn = Button(text="Translate", font_size=24, background_color=self.theme["primary"])
        clear_btn = Button(text="Clear", font_size=22, background_color=self.theme["closeButton"])
        copy_btn = Button(text="Copy", font_size=22, background_color=self.theme["surface"])
        speak_btn = Button(text="Speak", font_size=22, background_color=self.theme["accent"])
        sentences_btn = Button(text="Sentences", font_size=22, background_color=self.theme["warning"])
        self.translate_btn.bind(on_release=self.do_translate)
        clear_btn.bind(on_release=self.clear_texts)
        copy_btn.bind(on_release=self.copy_output)
        speak_btn.bind(on_release=self.speak_output)
        sentences_btn.bind(on_release=self.show_sentences_for_input)
        for b in (self.translate_btn, clear_btn, copy_btn, speak_btn, sentences_btn):
            actions.add_widget(b)
        self.add_widget(actions)
        self._register(self.source_spinner, self.target_spinner, self.swap_btn,
                       self.translate_btn, clear_btn, copy_btn, speak_btn, sentences_btn)

        recent_box = BoxLayout(orientation='vertical', size_hint=(1, 0.2))
        recent_box.add_widget(Label(text="Recent translations", size_hint=(1, None), height=32,
                                    font_size=20, color=self.theme["text"]))
        self.recent_container = GridLayout(cols=1, spacing=4, size_hint_y=None, padding=(0, 4))
        self.recent_container.bind(minimum_height=self.recent_container.setter('height'))
        sv = ScrollView(size_hint=(1, 1))
        sv.add_widget(self.recent_container)
        recent_box.add_widget(sv)
        self.add_widget(recent_box)

    # ---- Actions ----
    def do_translate(self, *_):
        text = (self.input_text.text or "").strip()
        if not text:
            self.show_notice("Enter text")
            return
        try:
            result = self.session.translate(text, self.state.source_language, self.state.target_language)
        except TranslatorError as e:
            self.show_notice(str(e))
            return
        self.output_text.text = result.display
        self.show_status(StatusMessage("Translated"))
        self.refresh_recent()

    def swap_languages(self, *_):
        if self.state.source_language == AUTO:
            self.show_notice("Cannot swap with Auto Detect")
            return
        src, tgt = self.source_spinner.text, self.target_spinner.text
        self.source_spinner.text, self.target_spinner.text = tgt, src
        self.input_text.text, self.output_text.text = self.output_text.text, self.input_text.text

    def clear_texts(self, *_):
        self.input_text.text = ""
        self.output_text.text = ""
        self.show_status(StatusMessage("Cleared"))

    def _has_output(self) -> bool:
        out = (self.output_text.text or "").strip()
        return bool(out) and out != NOT_FOUND_TEXT

    def copy_output(self, *_):
        if not self._has_output():
            self.show_notice("Nothing to copy")
            return
        Clipboard.copy(self.output_text.text)
        self.show_status(StatusMessage("Copied!", "success"))

    def speak_output(self, *_):
        if not self._has_output():
            self.show_notice("Nothing to speak")
            return
        if self.tts is None:
            self.show_status(StatusMessage("Speech is disabled"))
            return
        if not self.tts.speak(self.output_text.text, self.state.target_language):
            self.show_status(StatusMessage("Preparing voice, tap Speak again"))

    def show_sentences_for_input(self, *_):
        word = (self.input_text.text or "").strip()
        if not word:
            self.show_notice("Enter a word first")
            return
        self.open_sentences_popup(word)

    def refresh_recent(self):
        self.recent_container.clear_widgets()
        records = self.session.recent()
        if not records:
            self.recent_container.add_widget(Label(text="No recent translations yet", size_hint_y=None, height=36,
                                                   font_size=18, color=self.theme["muted"]))
            return
        for rec in records:
            row = BoxLayout(size_hint_y=None, height=40, spacing=6)
            row.add_widget(Label(text=f"{rec.original} -> {rec.translation}", font_size=20, color=self.theme["text"]))
            row.add_widget(Label(text=f"{rec.source_label} -> {rec.target_label}  {rec.timestamp}",
                                 size_hint=(0.45, 1), font_size=16, color=self.theme["muted"]))
            self.recent_container.add_widget(row)
