from latest_card.main import run

run()
