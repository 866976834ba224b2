"""Browser scripts run by Firecrawl inside the rendered repertory page."""

import json
from collections.abc import Sequence

# Clicks the first button/link whose trimmed text is one of the labels.
_ACCEPT_TERMS_TEMPLATE = r"""(() => {
  const labels = __LABELS__;
  const candidates = document.querySelectorAll('button, a, span');
  for (const el of candidates) {
    const text = (el.textContent || '').trim();
    if (labels.includes(text)) {
      el.click();
      return 'clicked';
    }
  }
  return 'not_found';
})();"""

# Collects {name, ipi} pairs from the rendered result list. Returns a JSON string.
DOM_SCAN_SCRIPT = r"""(() => {
  const results = [];
  const seen = new Set();
  const ipiPattern = /(\d{9,11})/;
  const push = (name, ipi) => {
    if (!name || seen.has(ipi)) return;
    if (name.length < 2 || name.length >= 80 || /^\d+$/.test(name)) return;
    seen.add(ipi);
    results.push({ name: name, ipi: ipi });
  };

  // Small elements that read "<name> IPI <number> ..."
  document.querySelectorAll('*').forEach((el) => {
    const text = el.textContent || '';
    const match = text.match(ipiPattern);
    if (!match || seen.has(match[1])) return;
    if (el.children.length >= 10 || text.length >= 200) return;
    const ipiIndex = text.toLowerCase().indexOf('ipi');
    if (ipiIndex <= 0) return;
    const name = text.substring(0, ipiIndex).trim()
      .replace(/^[\d\s-]+of[\s\d]+results?/i, '')
      .replace(/^results?/i, '')
      .trim();
    push(name, match[1]);
  });

  // Name links/labels whose enclosing row carries the number
  if (results.length === 0) {
    const selector = 'a[href*="ace"], a[href*="Search"], .writer-name, .publisher-name, '
      + '.performer-name, [class*="name"]';
    document.querySelectorAll(selector).forEach((el) => {
      const name = (el.textContent || '').trim();
      const row = el.closest('tr, li, [class*="result"], div');
      if (!row) return;
      const match = (row.textContent || '').match(ipiPattern);
      if (match) push(name, match[1]);
    });
  }

  return JSON.stringify(results);
})();"""


def build_accept_terms_script(labels: Sequence[str]) -> str:
    return _ACCEPT_TERMS_TEMPLATE.replace("__LABELS__", json.dumps(list(labels)))
