import logging

from leaderboard.web import LeaderboardApp

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

leaderboard = LeaderboardApp()
app = leaderboard.app

if __name__ == "__main__":
    leaderboard.run(debug=False)
