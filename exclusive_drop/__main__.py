from exclusive_drop.api.main import run

run()
