"""FM Formatter — Forza Motorsport 셋업 리포트 (reddit / discord)."""
