# host.py
#
# A small stand-in "web page" the game is hidden inside: headings,
# paragraphs and cards drawn in a centred column. Every block is a
# PageElement, which is exactly the handle the game needs for targets.

import pygame

PAGE_BG = (245, 245, 240)
RETRO_BG = (8, 16, 8)
INK = (30, 30, 30)
RETRO_INK = (0, 200, 0)
CARD_BG = (225, 230, 240)

CONTENT = [
    ("h1", "Hi, I build things for the web"),
    ("p", "Software engineer. Coffee, keyboards and retro games."),
    ("h2", "Selected work"),
    ("cards", ("Realtime dashboards", "Design systems", "Tiny games")),
    ("p", "Currently exploring audio synthesis and 2D rendering."),
    ("button", "Get in touch"),
]

HEIGHTS = {"h1": 64, "h2": 44, "p": 30, "cards": 120, "button": 44}
FONT_SIZES = {"h1": 44, "h2": 32, "p": 20, "card": 20, "button": 22}


class PageElement:
    def __init__(self, kind, text, rect, overlay=False):
        self.kind = kind
        self.text = text
        self.rect = pygame.Rect(rect)
        self.visible = True
        self.overlay = overlay

    def set_visible(self, visible):
        self.visible = visible


class DemoPage:
    def __init__(self, width, height):
        self.elements = []
        self.retro_mode = False
        self._fonts = {}
        self.layout(width, height)

    def layout(self, width, height):
        """Lay the column out for a viewport.

        Elements are created once; later calls only move their rects, so
        handles held by a running game keep pointing at the drawn blocks.
        """
        col_w = min(width - 80, 900)
        x = (width - col_w) // 2
        y = 120
        gap = 20
        blocks = []
        for kind, text in CONTENT:
            h = HEIGHTS[kind]
            if kind == "cards":
                card_w = (col_w - gap * (len(text) - 1)) // len(text)
                for i, title in enumerate(text):
                    blocks.append(("card", title, (x + i * (card_w + gap), y, card_w, h)))
            elif kind == "button":
                blocks.append((kind, text, (x, y, 180, h)))
            else:
                blocks.append((kind, text, (x, y, col_w, h)))
            y += h + gap

        if self.elements:
            for element, (_, _, rect) in zip(self.elements, blocks):
                element.rect.update(rect)
        else:
            self.elements = [PageElement(kind, text, rect) for kind, text, rect in blocks]
        self.size = (width, height)

    def query_targets(self):
        return list(self.elements)

    def set_retro_mode(self, enabled):
        self.retro_mode = enabled

    def _font(self, kind):
        size = FONT_SIZES[kind]
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont("Arial", size, bold=kind in ("h1", "h2"))
        return self._fonts[size]

    def draw(self, surf):
        surf.fill(RETRO_BG if self.retro_mode else PAGE_BG)
        ink = RETRO_INK if self.retro_mode else INK
        for e in self.elements:
            if not e.visible:
                continue
            if e.kind in ("card", "button"):
                pygame.draw.rect(surf, CARD_BG if not self.retro_mode else (0, 40, 0), e.rect, border_radius=8)
                txt = self._font(e.kind).render(e.text, True, ink)
                surf.blit(txt, txt.get_rect(center=e.rect.center))
            else:
                txt = self._font(e.kind).render(e.text, True, ink)
                surf.blit(txt, txt.get_rect(midleft=(e.rect.x, e.rect.centery)))
