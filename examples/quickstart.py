# %% [markdown]
# # fuzzypath: Quickstart
#
# Type a few letters, get the file you meant.
#
# | Part | Topic |
# |------|-------|
# | 1 | Ranking two strings |
# | 2 | Ranking a list |
# | 3 | Polars |
# | 4 | SQLite |
# | 5 | Case handling |

# %%
import polars as pl

import fuzzypath as fp

# %% [markdown]
# ---
# ## Part 1: Ranking two strings
#
# Ranks sort ascending. Lower is better.

# %%
for candidate in ["Projects/config/nvim", "Projects/neovim"]:
    print(f"  {fp.score('convim', candidate):>6}  {candidate}")

# %% [markdown]
# `explain` shows where a rank comes from.

# %%
print(fp.explain("convim", "Projects/config/nvim"))

# %% [markdown]
# ---
# ## Part 2: Ranking a list

# %%
paths = [
    "Projects/neovim/",
    "Projects/neo-api-rs/",
    "Projects/neo-api-rs/database.rs",
    "bin/google-cloud-sdk/lib/surface/monitoring/snoozes/",
    "Android/Sdk/platform-tools/fastboot",
]

for m in fp.best_matches(paths, "neo"):
    print(f"  {m.score:>6}  {m.text}")

# %% [markdown]
# Repeated searches over the same paths: build a PathIndex once.

# %%
index = fp.PathIndex(paths)
print(index.search("datab", limit=1))

# %% [markdown]
# ---
# ## Part 3: Polars

# %%
df = pl.DataFrame({"path": paths})
print(df.with_columns(rank=pl.col("path").fuzzy_path.score("neo")).sort("rank"))
print(fp.filter_dataframe(df, "path", "neo", limit=2))

# %% [markdown]
# ---
# ## Part 4: SQLite

# %%
conn = fp.sqlite.connect(":memory:")
conn.execute("CREATE TABLE files (path TEXT)")
conn.executemany("INSERT INTO files VALUES (?)", [(p,) for p in paths])
rows = conn.execute(
    "SELECT path, fuzzy_score(:q, path) AS rank FROM files "
    "WHERE rank < 10000 ORDER BY rank",
    {"q": "neo"},
).fetchall()
for path, rank in rows:
    print(f"  {rank:>6}  {path}")

# %% [markdown]
# ---
# ## Part 5: Case handling
#
# By default an upper-case path character satisfies a lower-case query
# character, but not the other way round.

# %%
print(fp.score("prnvim", "Projects/config/nvim"))
print(fp.score("PRnvim", "Projects/config/nvim"))
print(fp.best_matches(["Projects/config/nvim"], "PRnvim", case_mode=fp.CaseMode.IGNORE))
