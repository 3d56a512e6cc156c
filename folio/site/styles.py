"""Inline CSS used by the static site generator."""

CSS = r"""
:root {
  --bg: #fdfdfc;
  --fg: #222;
  --muted: #707070;
  --border: #e6e6e6;
  --link: #1a5fb4;
  --accent: #f4efe3;
  --sans: -apple-system, "Segoe UI", Roboto, "Helvetica Neue", sans-serif;
  --mono: ui-monospace, "SF Mono", "Consolas", "Liberation Mono", monospace;
  --page-max: 720px;
}

body {
  font-family: var(--sans);
  font-size: 16px;
  line-height: 1.65;
  max-width: var(--page-max);
  margin: 0 auto;
  padding: 2rem 1.25rem 3rem;
  background: var(--bg);
  color: var(--fg);
}

a { color: var(--link); text-decoration: none; }
a:hover { text-decoration: underline; }

header {
  display: flex;
  justify-content: space-between;
  align-items: baseline;
  border-bottom: 1px solid var(--border);
  padding-bottom: 0.75rem;
  margin-bottom: 1.5rem;
}

nav a { margin-left: 1rem; color: var(--muted); font-size: 14px; }

h1 { font-size: 26px; margin: 0 0 0.5rem 0; }
h2 { font-size: 13px; color: var(--muted); letter-spacing: 0.06em; margin: 1.75rem 0 0.5rem; }
article h2 { font-size: 20px; color: var(--fg); letter-spacing: 0; }
article h3 { font-size: 17px; }

.muted { color: var(--muted); font-size: 14px; }
.mono { font-family: var(--mono); }
.rule { border-top: 1px solid var(--border); margin: 1.25rem 0; }
.tag {
  font-family: var(--mono);
  font-size: 12px;
  padding: 0 0.35rem;
  border: 1px solid var(--border);
  color: var(--muted);
}
.banner { background: var(--accent); padding: 0.4rem 0.75rem; margin-bottom: 1rem; font-size: 14px; }

ul.list { list-style: none; padding-left: 0; }
ul.list li { margin: 0.6rem 0; }

figure { margin: 1rem 0; }
figure img, article img { max-width: 100%; height: auto; }
figcaption { color: var(--muted); font-size: 13px; }

table { border-collapse: collapse; width: 100%; margin: 0.75rem 0; }
th, td { border: 1px solid var(--border); padding: 0.35rem 0.5rem; vertical-align: top; }
th { text-align: left; }

pre {
  overflow-x: auto;
  padding: 0.6rem 0.8rem;
  border: 1px solid var(--border);
  background: #f6f6f4;
}

code { font-family: var(--mono); font-size: 0.92em; }
p code, li code { background: #f1f1ef; padding: 0.1rem 0.25rem; }

blockquote {
  margin: 0.75rem 0;
  padding: 0 0.9rem;
  border-left: 3px solid var(--border);
  color: var(--muted);
}

hr { border: none; border-top: 1px solid var(--border); margin: 1.5rem 0; }

@media (max-width: 600px) {
  body { padding: 1.25rem 1rem 2rem; }
  header { flex-wrap: wrap; }
  nav a { margin-left: 0; margin-right: 1rem; }
}
"""
