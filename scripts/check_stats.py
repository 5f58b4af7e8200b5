"""Check stats - fetch the VG sheet once and print what would be posted."""
import requests, json
from corona_bot.config import get_settings
from corona_bot.notify import MessageFormatter
from corona_bot.sources import VgStatsFetcher

s = get_settings()

# Raw payload first, to eyeball field names if parsing breaks
r = requests.get(s.stats_url, timeout=s.request_timeout)
print(f"HTTP {r.status_code} from {s.stats_url}")
if r.status_code == 200:
    meta = json.loads(r.text).get("metadata", {})
    print(json.dumps({k: meta.get(k) for k in ("population", "confirmed", "dead")}, indent=2))

stats = VgStatsFetcher().fetch()
print(f"\nSnapshot: {stats}")
if stats.is_complete:
    print(f"Message:  {MessageFormatter.format_stats(stats)}")
else:
    print("Incomplete data - the bot would fall back to its cache")
