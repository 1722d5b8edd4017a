"""
HTML page templates
Home and dashboard pages rendered server-side with inline styles
"""

from html import escape

# Brand colors - Blue/Slate color scheme
THEME = {
    "primary": "#2563eb",
    "primary_dark": "#1d4ed8",
    "primary_light": "#dbeafe",
    "background": "#f8fafc",
    "card_bg": "#ffffff",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
}

FEATURES = [
    (
        "Booking Management",
        "Easily manage appointments, track schedules, and handle cancellations all in one place.",
    ),
    (
        "Customer Management",
        "Keep track of your customers, their preferences, and booking history for better service.",
    ),
    (
        "Service Management",
        "Define your services, set pricing, and manage availability with flexible options.",
    ),
]


def format_currency(amount: float) -> str:
    return f"${amount:,.2f}"


def get_base_template(title: str, content: str, header_right: str = "") -> str:
    """Page shell shared by every HTML page"""
    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{escape(title)} | Washify</title>
    <style>
      body {{ margin: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif; background: {THEME['background']}; color: {THEME['text_secondary']}; }}
      header {{ background: {THEME['card_bg']}; border-bottom: 1px solid {THEME['border']}; }}
      .container {{ max-width: 1120px; margin: 0 auto; padding: 0 24px; }}
      .bar {{ display: flex; align-items: center; justify-content: space-between; height: 64px; }}
      .brand {{ font-size: 20px; font-weight: 700; color: {THEME['text_primary']}; text-decoration: none; }}
      .button {{ display: inline-block; background: {THEME['primary']}; color: #ffffff; padding: 12px 28px; border-radius: 8px; font-weight: 600; text-decoration: none; }}
      .button.secondary {{ background: {THEME['card_bg']}; color: {THEME['text_primary']}; border: 1px solid {THEME['border']}; }}
      .grid {{ display: grid; gap: 24px; grid-template-columns: repeat(auto-fit, minmax(220px, 1fr)); }}
      .card {{ background: {THEME['card_bg']}; border: 1px solid {THEME['border']}; border-radius: 8px; padding: 24px; }}
      .muted {{ color: {THEME['text_muted']}; }}
      h1, h2, h3 {{ color: {THEME['text_primary']}; }}
      footer {{ border-top: 1px solid {THEME['border']}; margin-top: 96px; padding: 32px 0; font-size: 14px; }}
    </style>
  </head>
  <body>
    <header>
      <div class="container bar">
        <a class="brand" href="/">Washify</a>
        <nav>{header_right}</nav>
      </div>
    </header>
    <main class="container">
      {content}
    </main>
    <footer>
      <div class="container bar">
        <span class="brand">Washify</span>
        <span class="muted">&copy; Washify. All rights reserved.</span>
      </div>
    </footer>
  </body>
</html>
"""


def render_home() -> str:
    features = "".join(
        f"""
        <div class="card">
          <h3>{escape(title)}</h3>
          <p class="muted">{escape(text)}</p>
        </div>"""
        for title, text in FEATURES
    )

    content = f"""
      <section style="text-align: center; padding: 64px 0;">
        <h1 style="font-size: 48px; margin: 0;">
          Professional Car Wash <span style="color: {THEME['primary']};">Management</span>
        </h1>
        <p style="font-size: 20px; max-width: 640px; margin: 24px auto;" class="muted">
          Streamline your car wash business with our comprehensive management platform.
          Handle bookings, manage services, and grow your customer base.
        </p>
        <a class="button" href="/docs">Start Your Free Trial</a>
        <a class="button secondary" href="#features">Learn More</a>
      </section>

      <section id="features" style="padding-top: 48px;">
        <div style="text-align: center;">
          <h2>Everything you need to manage your car wash business</h2>
          <p class="muted">From booking management to customer communication, we've got you covered.</p>
        </div>
        <div class="grid" style="margin-top: 48px;">{features}
        </div>
      </section>
    """
    return get_base_template("Professional Car Wash Management", content)


def render_dashboard(user_name: str, role: str, stats: list[tuple[str, str]]) -> str:
    """
    Dashboard page.

    Args:
        user_name: Display name of the signed-in user
        role: Role value shown next to the greeting
        stats: (label, formatted value) pairs in display order
    """
    cards = "".join(
        f"""
        <div class="card">
          <div class="muted" style="font-size: 14px;">{escape(label)}</div>
          <div style="font-size: 24px; font-weight: 600; color: {THEME['text_primary']};">{escape(value)}</div>
        </div>"""
        for label, value in stats
    )

    content = f"""
      <section style="padding: 32px 0;">
        <h1 style="margin-bottom: 4px;">Dashboard</h1>
        <p class="muted">Welcome back, {escape(user_name)}! <span style="background: {THEME['primary_light']}; color: {THEME['primary_dark']}; padding: 2px 8px; border-radius: 999px; font-size: 12px;">{escape(role)}</span></p>
      </section>
      <section class="grid">{cards}
      </section>
      <section class="card" style="margin-top: 32px; text-align: center;">
        <h2>Welcome to Washify!</h2>
        <p class="muted">
          Your car wash management dashboard is ready. Here you can manage your
          bookings, services, customers, and track your business performance.
        </p>
      </section>
    """
    return get_base_template("Dashboard", content, header_right=escape(user_name))
