"""Inline Jinja templates for the leaderboard and the instructions page."""

LEADERBOARD_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ league.name }} - FPL Leaderboard</title>
    <link rel="icon" href="data:image/svg+xml,<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 100 100'><text y='0.9em' font-size='90'>⚽</text></svg>">
    <style>
        * {
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }

        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            background: linear-gradient(135deg, #37003c 0%, #2d0032 100%);
            min-height: 100vh;
            padding: 20px;
            color: #333;
        }

        .container {
            max-width: 1000px;
            margin: 0 auto;
        }

        .header {
            background: white;
            padding: 24px 20px;
            border-radius: 12px;
            text-align: center;
            margin-bottom: 20px;
            box-shadow: 0 4px 15px rgba(0, 0, 0, 0.2);
        }

        .header h1 {
            color: #37003c;
            font-size: 2em;
            margin-bottom: 8px;
        }

        .live-indicator {
            color: #00b36b;
            font-weight: 700;
            font-size: 0.9em;
        }

        .gameweek-info {
            color: #666;
            font-size: 1.1em;
            margin: 6px 0;
        }

        .last-updated {
            color: #888;
            font-size: 0.9em;
        }

        .error-message {
            color: #721c24;
            background: #f8d7da;
            border: 1px solid #f5c6cb;
            border-radius: 8px;
            padding: 12px 16px;
            margin-bottom: 20px;
        }

        .leaderboard {
            background: white;
            border-radius: 12px;
            overflow: hidden;
            box-shadow: 0 4px 15px rgba(0, 0, 0, 0.2);
        }

        table {
            width: 100%;
            border-collapse: collapse;
        }

        th, td {
            padding: 12px 10px;
            border-bottom: 1px solid #eee;
            text-align: left;
        }

        th {
            background: #37003c;
            color: white;
            font-weight: 600;
        }

        .center {
            text-align: center;
        }

        .rank-medal {
            display: inline-block;
            width: 32px;
            height: 32px;
            line-height: 32px;
            border-radius: 50%;
            font-weight: 700;
            color: white;
        }

        .rank-1 .rank-medal { background: #d4af37; }
        .rank-2 .rank-medal { background: #a8a9ad; }
        .rank-3 .rank-medal { background: #cd7f32; }

        .team-name {
            font-weight: 600;
            color: #37003c;
        }

        .manager-name {
            color: #777;
            font-size: 0.9em;
        }

        .total-points {
            font-weight: 700;
        }

        .refresh-button {
            display: block;
            margin: 20px auto 0;
            padding: 12px 28px;
            background: #00ff87;
            color: #37003c;
            border: none;
            border-radius: 8px;
            font-size: 1.1em;
            font-weight: 600;
            cursor: pointer;
        }

        .refresh-button:disabled {
            background: #ccc;
            color: #666;
            cursor: not-allowed;
        }

        @media (max-width: 768px) {
            .overall-rank-col {
                display: none;
            }
        }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{{ league.name }}</h1>
            <div class="live-indicator">● LIVE</div>
            <div class="gameweek-info">Gameweek {{ league.current_gameweek }}</div>
            <div class="last-updated">
                Last updated: {{ last_updated }} ({{ cache_age }})
            </div>
        </div>

        {% if error %}
        <div class="error-message">
            ⚠️ {{ error }}
        </div>
        {% endif %}

        <div class="leaderboard">
            <table>
                <thead>
                    <tr>
                        <th class="center">Rank</th>
                        <th>Team</th>
                        <th class="center">Total Points</th>
                        <th class="center">GW Points</th>
                        <th class="center overall-rank-col">Overall Rank</th>
                    </tr>
                </thead>
                <tbody>
                    {% for standing in standings %}
                    <tr>
                        <td class="center rank rank-{{ standing.rank }}">
                            {% if standing.rank <= 3 %}
                                <span class="rank-medal">{{ standing.rank }}</span>
                            {% else %}
                                {{ standing.rank }}
                            {% endif %}
                        </td>
                        <td>
                            <div class="team-info">
                                <div class="team-name">{{ standing.entry_name }}</div>
                                <div class="manager-name">{{ standing.player_name }}</div>
                            </div>
                        </td>
                        <td class="center total-points">{{ standing.total_points|thousands }}</td>
                        <td class="center gw-points">{{ standing.event_points }}</td>
                        <td class="center overall-rank overall-rank-col">{{ standing.overall_rank|thousands }}</td>
                    </tr>
                    {% endfor %}
                </tbody>
            </table>
        </div>

        <button class="refresh-button" id="refreshBtn" onclick="handleRefresh()">↻ Refresh</button>
    </div>

    <script>
        const lastUpdatedTime = new Date({{ last_updated|tojson }}).getTime();
        const lastUpdatedLabel = {{ last_updated|tojson }};

        function updateTimestamp() {
            const diffSeconds = Math.max(0, Math.floor((Date.now() - lastUpdatedTime) / 1000));
            let timeString;
            if (diffSeconds < 60) {
                timeString = diffSeconds + ' second' + (diffSeconds !== 1 ? 's' : '') + ' ago';
            } else if (diffSeconds < 3600) {
                const minutes = Math.floor(diffSeconds / 60);
                timeString = minutes + ' minute' + (minutes !== 1 ? 's' : '') + ' ago';
            } else {
                const hours = Math.floor(diffSeconds / 3600);
                timeString = hours + ' hour' + (hours !== 1 ? 's' : '') + ' ago';
            }
            document.querySelector('.last-updated').textContent =
                'Last updated: ' + lastUpdatedLabel + ' (' + timeString + ')';
        }
        if (!isNaN(lastUpdatedTime)) {
            setInterval(updateTimestamp, 1000);
            updateTimestamp();
        }

        const COOLDOWN_SECONDS = {{ cooldown }};
        const COOLDOWN_KEY = 'fpl_last_refresh_{{ league.id }}';

        function secondsUntilAllowed() {
            const lastRefresh = localStorage.getItem(COOLDOWN_KEY);
            if (!lastRefresh) {
                return 0;
            }
            const elapsed = (Date.now() - parseInt(lastRefresh)) / 1000;
            return Math.max(0, Math.ceil(COOLDOWN_SECONDS - elapsed));
        }

        function handleRefresh() {
            const remaining = secondsUntilAllowed();
            if (remaining > 0) {
                alert('Please wait ' + remaining + ' second' + (remaining !== 1 ? 's' : '') + ' before refreshing again.');
                return;
            }
            localStorage.setItem(COOLDOWN_KEY, Date.now().toString());
            window.location.href = '?league={{ league.id }}&refresh=1';
        }

        function checkCooldown() {
            const btn = document.getElementById('refreshBtn');
            const tick = () => {
                const remaining = secondsUntilAllowed();
                if (remaining <= 0) {
                    btn.disabled = false;
                    btn.textContent = '↻ Refresh';
                    return false;
                }
                btn.disabled = true;
                btn.textContent = '⏳ Wait ' + remaining + 's';
                return true;
            };
            if (tick()) {
                const interval = setInterval(() => {
                    if (!tick()) {
                        clearInterval(interval);
                    }
                }, 1000);
            }
        }
        checkCooldown();
    </script>
</body>
</html>
"""

HOMEPAGE_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>FPL Real-Time Leaderboard</title>
    <link rel="icon" href="data:image/svg+xml,<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 100 100'><text y='0.9em' font-size='90'>⚽</text></svg>">
    <style>
        * {
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }

        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
            padding: 20px;
            display: flex;
            align-items: center;
            justify-content: center;
        }

        .container {
            max-width: 800px;
            width: 100%;
        }

        .card {
            background: white;
            padding: 40px;
            border-radius: 15px;
            box-shadow: 0 10px 30px rgba(0, 0, 0, 0.2);
            margin-bottom: 20px;
        }

        h1 {
            color: #37003c;
            font-size: 2.5em;
            margin-bottom: 10px;
            text-align: center;
        }

        .subtitle {
            text-align: center;
            color: #666;
            margin-bottom: 30px;
        }

        .error {
            background: #f8d7da;
            border: 1px solid #f5c6cb;
            color: #721c24;
            padding: 15px;
            border-radius: 8px;
            margin-bottom: 20px;
        }

        .form-group {
            margin-bottom: 25px;
        }

        label {
            display: block;
            font-weight: 600;
            color: #37003c;
            margin-bottom: 8px;
        }

        input[type="text"], select {
            width: 100%;
            padding: 15px;
            border: 2px solid #ddd;
            border-radius: 8px;
            font-size: 1.1em;
            background: white;
        }

        button {
            width: 100%;
            background: #37003c;
            color: white;
            border: none;
            padding: 15px;
            border-radius: 8px;
            font-size: 1.2em;
            font-weight: 600;
            cursor: pointer;
        }

        button:hover {
            background: #00ff87;
            color: #37003c;
        }

        .instructions h2 {
            color: #37003c;
            margin-bottom: 15px;
        }

        .instructions ol {
            margin-left: 20px;
            line-height: 1.8;
            color: #555;
        }

        .example {
            background: #f8f9ff;
            padding: 15px;
            border-radius: 8px;
            margin-top: 15px;
            font-family: monospace;
            word-break: break-all;
        }
    </style>
</head>
<body>
    <div class="container">
        <div class="card">
            <h1>⚽ FPL Real-Time Leaderboard</h1>
            <p class="subtitle">View live Fantasy Premier League standings with accurate points</p>

            {% if error %}
            <div class="error">
                <strong>Error:</strong> {{ error }}
            </div>
            {% endif %}

            <form method="get" action="">
                <div class="form-group">
                    <label for="league">League ID</label>
                    <input type="text" id="league" name="league" placeholder="e.g., 309812"
                           required pattern="[0-9]+" title="Please enter a valid numeric league ID">
                </div>
                <div class="form-group">
                    <label for="format">Output Format</label>
                    <select id="format" name="format">
                        <option value="html">HTML (Interactive Leaderboard)</option>
                        <option value="json">JSON (API Response)</option>
                        <option value="csv">CSV (Download)</option>
                    </select>
                </div>
                <button type="submit">View Leaderboard →</button>
            </form>
        </div>

        <div class="card instructions">
            <h2>📋 How to Find Your League ID</h2>
            <ol>
                <li>Log in on the <strong>Fantasy Premier League website</strong></li>
                <li>Open <strong>Leagues &amp; Cups</strong> from the main menu</li>
                <li>Click on the <strong>league</strong> you want to view</li>
                <li>The league ID is the <strong>number</strong> in the URL after <code>/leagues/</code></li>
            </ol>
            <div class="example">
                Example: https://fantasy.premierleague.com/leagues/309812/standings/c
                <br>→ League ID is <strong>309812</strong>
            </div>
        </div>
    </div>
</body>
</html>
"""
