from kivy.clock import Clock
from kivy.graphics import Color, Rectangle, RoundedRectangle, StencilPush, StencilUse, StencilUnUse, StencilPop
from kivy.properties import NumericProperty, StringProperty
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.popup import Popup

STATUS_COLORS = {
    "info": (0.20, 0.52, 0.90, 1),
    "success": (0.25, 0.65, 0.38, 1),
    "error": (0.85, 0.32, 0.35, 1),
}


class RoundedButton(Button):
    corner_radius = NumericProperty(12)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.background_normal = ""
        self.background_down = ""
        self._build_canvas()
        self.bind(pos=self._update_canvas, size=self._update_canvas,
                  state=self._update_canvas, background_color=self._update_canvas,
                  disabled=self._update_canvas)

    def _build_canvas(self):
        self.canvas.before.clear()
        self.canvas.after.clear()
        r = float(self.corner_radius)
        with self.canvas.before:
            StencilPush()
            Color(1, 1, 1, 1)
            self._mask = RoundedRectangle(pos=self.pos, size=self.size, radius=[(r, r)] * 4)
            StencilUse()
            self._bg_color_instr = Color(*self._fill())
            self._bg_rect = Rectangle(pos=self.pos, size=self.size)
        with self.canvas.after:
            StencilUnUse()
            Color(1, 1, 1, 1)
            self._mask_after = RoundedRectangle(pos=self.pos, size=self.size, radius=[(r, r)] * 4)
            StencilPop()

    def _fill(self):
        r, g, b, a = self.background_color
        if self.disabled:
            return (r * 0.5, g * 0.5, b * 0.5, a)
        if self.state == "down":
            return (r * 0.8, g * 0.8, b * 0.8, a)
        return (r, g, b, a)

    def on_corner_radius(self, *_):
        self._update_canvas()

    def _update_canvas(self, *_):
        if not hasattr(self, "_mask"):
            return
        radius = [(float(self.corner_radius),) * 2] * 4
        for shape in (self._mask, self._mask_after):
            shape.pos = self.pos
            shape.size = self.size
            shape.radius = radius
        self._bg_color_instr.rgba = self._fill()
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size


class StatusBar(Label):
    """One-line status; everything except errors falls back to 'Ready'."""
    level = StringProperty("info")
    idle_text = StringProperty("Ready")

    def __init__(self, dismiss_after: float = 3.0, **kwargs):
        super().__init__(**kwargs)
        self.dismiss_after = dismiss_after
        self._reset_ev = None
        with self.canvas.before:
            self._bg_color = Color(*STATUS_COLORS["info"])
            self._bg = RoundedRectangle(pos=self.pos, size=self.size, radius=[(10, 10)] * 4)
        self.bind(pos=self._sync_bg, size=self._sync_bg, level=self._sync_bg)
        self._show(self.idle_text, "info")

    def _sync_bg(self, *_):
        self._bg.pos = self.pos
        self._bg.size = self.size
        self._bg_color.rgba = STATUS_COLORS.get(self.level, STATUS_COLORS["info"])

    def _show(self, text, level):
        self.level = level
        self.text = text

    def show(self, message, hold: bool = False):
        if self._reset_ev is not None:
            self._reset_ev.cancel()
            self._reset_ev = None
        self._show(message.text, message.level)
        if not (message.sticky or hold):
            self._reset_ev = Clock.schedule_once(lambda dt: self._show(self.idle_text, "info"), self.dismiss_after)


def notice_popup(message: str, title: str = "Notice"):
    # blockierender Hinweis (alert-Ersatz)
    root = BoxLayout(orientation="vertical", spacing=10, padding=12)
    root.add_widget(Label(text=message, font_size=22))
    ok_btn = RoundedButton(text="OK", size_hint=(1, 0.35), font_size=22, background_color=(0.25, 0.55, 0.9, 1))
    root.add_widget(ok_btn)
    popup = Popup(title=title, content=root, size_hint=(0.7, 0.35), auto_dismiss=False)
    ok_btn.bind(on_release=lambda *_: popup.dismiss())
    popup.open()
    return popup


def confirm_popup(message: str, on_confirm, title: str = "Confirm"):
    root = BoxLayout(orientation="vertical", spacing=10, padding=12)
    root.add_widget(Label(text=message, font_size=22))
    bar = BoxLayout(size_hint=(1, 0.35), spacing=8)
    no_btn = RoundedButton(text="Cancel", font_size=22, background_color=(0.5, 0.5, 0.5, 1))
    yes_btn = RoundedButton(text="OK", font_size=22, background_color=(0.2, 0.6, 0.2, 1))
    bar.add_widget(no_btn)
    bar.add_widget(yes_btn)
    root.add_widget(bar)
    popup = Popup(title=title, content=root, size_hint=(0.7, 0.35), auto_dismiss=False)

    def _yes(*_):
        popup.dismiss()
        on_confirm()
    no_btn.bind(on_release=lambda *_: popup.dismiss())
    yes_btn.bind(on_release=_yes)
    popup.open()
    return popup
