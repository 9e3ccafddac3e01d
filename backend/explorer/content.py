"""
Local database for the ship computer.

Three fact tables per body (science readouts, trivia, sense of scale). The
passive scan interleaves them so consecutive visits rotate through a mix.
"""


DESCRIPTIONS = {
    "Sun": [
        "Fusion core operating at nominal efficiency. Surface temperature: 5,500 degrees Celsius.",
        "Solar flare activity detected in the northern hemisphere. Radiation levels elevated.",
        "Gravity well depth: maximum. Do not approach closer than 0.1 AU.",
        "Coronal mass ejection warning. Magnetic field fluctuations detected."
    ],
    "Mercury": [
        "Surface temperature variance detected: 430°C day side, -180°C night side.",
        "Crater density: High. No atmosphere detected to burn up incoming debris.",
        "Solar proximity extreme. Shields at maximum power.",
        "Magnetic field is weak, only 1% of Earth's. Solar wind stripping surface atoms."
    ],
    "Venus": [
        "Atmospheric pressure: 92 times that of Earth. Clouds composed of sulfuric acid.",
        "Runaway greenhouse effect confirmed. Surface is hot enough to melt lead.",
        "Thick cloud cover blocking visual scans. Surface radar mapping enabled.",
        "Rotates retrograde. The sun rises in the west here."
    ],
    "Earth": [
        "High concentrations of liquid water and nitrogen-oxygen atmosphere detected.",
        "Radio frequency emissions detected. Signs of advanced technological civilization.",
        "Biosphere scan: Diverse carbon-based lifeforms detected.",
        "Satellite debris field detected in upper orbit. Navigation hazard."
    ],
    "Mars": [
        "Iron oxide dust covering surface. Trace amounts of methane detected in atmosphere.",
        "Largest volcano in the solar system, Olympus Mons, detected on the Tharsis Bulge.",
        "Polar ice caps consist of water and dry ice (frozen carbon dioxide).",
        "Evidence of ancient riverbeds. Initiating subsurface water scan."
    ],
    "Ceres": [
        "Largest object in the asteroid belt. Surface composition: mixture of water ice and carbonate minerals.",
        "Bright spots detected in Occator Crater. Likely sodium carbonate deposits.",
        "Dwarf planet classification confirmed. Cryovolcanic activity possible.",
        "Low density suggests significant porosity or water ice content."
    ],
    "Jupiter": [
        "Gas giant. Mass: 2.5 times that of all other planets combined.",
        "Great Red Spot anticyclonic storm persists. Wind speeds exceeding 400 km/h.",
        "Magnetosphere is the largest continuous structure in the solar system.",
        "Radiation belts are lethal. Keeping safe distance from Io torus."
    ],
    "Saturn": [
        "Extensive ring system detected. Composed primarily of water ice and trace rock material.",
        "Atmosphere: Hydrogen and helium. Hexagonal storm pattern detected at north pole.",
        "Density is lower than water. This planet would float in a sufficiently large ocean.",
        "Titan and Enceladus detected nearby. Potential targets for habitability scans."
    ],
    "Uranus": [
        "Ice giant. Atmosphere contains water, ammonia, and methane ices.",
        "Axis of rotation is tilted 98 degrees. Rolling around the sun on its side.",
        "Coldest planetary atmosphere in the solar system. Temperature: -224°C.",
        "Faint ring system detected. Dark and narrow compared to Saturn."
    ],
    "Neptune": [
        "Wind speeds detected at 2,100 km/h. Fastest in the solar system.",
        "Deep blue coloration due to methane absorption of red light.",
        "Great Dark Spot detected. A massive storm system in the southern hemisphere.",
        "Internal heat source radiating 2.6 times more energy than it receives from the sun."
    ],
    "Pluto": [
        "Nitrogen ice glaciers detected moving across surface.",
        "Atmosphere is tenuous and expands when closer to the Sun.",
        "Binary system characteristics detected with moon Charon.",
        "Heart-shaped glacier 'Tombaugh Regio' consisting of nitrogen and carbon monoxide ices."
    ],
    "Haumea": [
        "Rapid rotation detected. Day length: 3.9 hours. Shape is distinctly ellipsoidal.",
        "Crystalline water ice surface. Two small moons orbiting.",
        "High albedo detected. Surface is very bright, likely fresh ice.",
        "Ring system detected around the dwarf planet."
    ],
    "Makemake": [
        "Surface covered in methane, ethane, and nitrogen ices.",
        "Reddish surface color. Lack of significant atmosphere detected.",
        "Located in the classical Kuiper Belt. Temperature approx 30 Kelvin.",
        "No moons initially detected, though faint satellite 'MK2' is now visible."
    ],
    "Eris": [
        "Most massive dwarf planet. Surface highly reflective due to methane ice.",
        "Orbit is highly eccentric and inclined relative to the solar plane.",
        "Located in the scattered disc. Distance from sun is extreme.",
        "Surface temperature is -243 degrees Celsius. Nitrogen atmosphere has collapsed onto the surface."
    ],
}

FUN_FACTS = {
    "Sun": [
        "The Sun accounts for 99.86% of the mass in the entire solar system.",
        "It takes light approximately 8 minutes and 20 seconds to travel from the Sun to Earth.",
        "One million Earths could fit inside the Sun if it were hollow.",
        "The Sun is traveling at 220 km per second through the Milky Way."
    ],
    "Mercury": [
        "A year on Mercury is just 88 Earth days long, but a day lasts 176 Earth days.",
        "Mercury has wrinkles! As its iron core cooled and contracted, the planet's surface puckered.",
        "Despite being closest to the Sun, it is not the hottest planet (Venus is).",
        "Your weight on Mercury would be 38% of your weight on Earth."
    ],
    "Venus": [
        "Venus spins clockwise on its axis, unlike most other planets (retrograde rotation).",
        "A day on Venus is longer than a year on Venus.",
        "It is the brightest natural object in Earth's night sky after the Moon.",
        "The pressure on Venus's surface is 90 times higher than on Earth."
    ],
    "Earth": [
        "Earth is the only planet not named after a Roman or Greek god.",
        "It is the densest planet in the Solar System.",
        "Earth's rotation is gradually slowing down, lengthening our days by 1.7 milliseconds per century.",
        "70% of the Earth's surface is covered in water."
    ],
    "Mars": [
        "Sunsets on Mars appear blue to human observers.",
        "You could jump 3 times higher on Mars than on Earth due to lower gravity.",
        "Mars has dust storms that can last for months and cover the entire planet.",
        "Pieces of Mars have been found on Earth (Martian meteorites)."
    ],
    "Ceres": [
        "Ceres was the first dwarf planet discovered, originally classified as a planet in 1801.",
        "It contains about one-third of the total mass of the asteroid belt.",
        "It is the only dwarf planet located in the inner solar system.",
        "Ceres loses 6kg of mass per second in steam plumes when close to the Sun."
    ],
    "Jupiter": [
        "Jupiter has the shortest day of all the planets, spinning once every 10 hours.",
        "The Great Red Spot is a storm that has been raging for at least 350 years.",
        "Jupiter acts as a 'vacuum cleaner' for the solar system, absorbing comets and asteroids.",
        "If Jupiter were 80 times more massive, it would have become a star."
    ],
    "Saturn": [
        "You can't stand on Saturn; it's made mostly of hydrogen and helium gases.",
        "Saturn is the only planet that is less dense than water; it would float in a giant bathtub.",
        "The winds on Saturn can reach speeds of 1,800 km/h (1,118 mph).",
        "Saturn's rings are mostly chunks of ice ranging from dust-sized to house-sized."
    ],
    "Uranus": [
        "Uranus is the only planet that rotates on its side, rolling like a ball around the Sun.",
        "It was the first planet discovered with the aid of a telescope (1781).",
        "Its moons are named after characters from William Shakespeare and Alexander Pope.",
        "It hits the coldest temperatures of any planet, reaching -224°C."
    ],
    "Neptune": [
        "Neptune has only completed one orbit around the Sun since its discovery in 1846 (orbit completed in 2011).",
        "It theoretically rains diamonds deep inside Neptune's atmosphere.",
        "It has the strongest winds in the solar system, reaching supersonic speeds.",
        "Neptune was predicted by mathematics before it was ever seen by a telescope."
    ],
    "Pluto": [
        "Pluto is smaller than Earth's moon.",
        "One third of Pluto is water ice; it has more water than Earth's oceans.",
        "Currently, Pluto has five known moons: Charon, Styx, Nix, Kerberos, and Hydra.",
        "Sunlight on Pluto is about as bright as a full moon on Earth."
    ],
    "Haumea": [
        "Haumea is shaped like a football (ellipsoid) because it spins so incredibly fast.",
        "It completes a full rotation in under 4 hours, making it one of the fastest spinning large objects.",
        "It has a dark red spot, possibly rich in minerals and organic compounds.",
        "Haumea is the third brightest object in the Kuiper Belt."
    ],
    "Makemake": [
        "It was discovered near Easter in 2005, hence the code name 'Easterbunny' before official naming.",
        "Makemake is the second brightest object in the Kuiper Belt after Pluto.",
        "It takes about 305 Earth years to complete one orbit around the Sun.",
        "It lacks a significant atmosphere for most of its orbit."
    ],
    "Eris": [
        "Eris is more massive than Pluto, a discovery that led to the demotion of Pluto to dwarf planet.",
        "It is so far away that its atmosphere freezes and collapses onto the surface as snow.",
        "Named after the Greek goddess of strife and discord.",
        "One year on Eris lasts 558 Earth years."
    ],
}

SCALE_FACTS = {
    "Sun": [
        "The Sun is so massive that 1.3 million Earths could fit inside it.",
        "The diameter of the Sun is 1.4 million km, about 109 times the diameter of Earth.",
        "It is 400 times further from Earth than the Moon is.",
        "The Sun makes up 99.8% of the total mass of the entire Solar System."
    ],
    "Mercury": [
        "Mercury is the smallest planet, only slightly larger than Earth's Moon.",
        "If Earth were the size of a baseball, Mercury would be the size of a golf ball.",
        "Despite being the closest planet, it is still 58 million km (0.39 AU) from the Sun.",
        "Its gravity is only 38% of Earth's; a 100kg human would weigh 38kg here."
    ],
    "Venus": [
        "Venus is often called Earth's twin because they are nearly identical in size (radius 6,051 km vs Earth's 6,371 km).",
        "It is 0.72 Astronomical Units from the Sun (about 108 million km).",
        "While similar in size to Earth, its mass is about 81% of Earth's mass.",
        "It is the closest planet to Earth, coming within 41 million km at its nearest point."
    ],
    "Earth": [
        "Earth's diameter is 12,742 km.",
        "The distance to the Moon is about 384,000 km, or roughly 30 Earths lined up.",
        "We orbit the Sun at an average distance of 150 million km (1 Astronomical Unit).",
        "The atmosphere is only about 100km thick; compared to the planet, it's thinner than the skin of an apple."
    ],
    "Mars": [
        "Mars is about half the diameter of Earth (6,779 km).",
        "It has only 11% of Earth's mass.",
        "It orbits at 1.5 AU, averaging 228 million km from the Sun.",
        "Mars's moons, Phobos and Deimos, are tiny asteroids captured by gravity; Phobos is only 22km wide."
    ],
    "Ceres": [
        "Ceres has a diameter of 940 km, which is about the width of the state of Texas.",
        "It is 2.7 AU from the Sun, deep within the asteroid belt.",
        "It comprises 25% of the asteroid belt's total mass, but is still 14 times smaller than Pluto.",
        "Its surface area is approximately equal to the land area of India."
    ],
    "Jupiter": [
        "Jupiter is 11 times wider than Earth; if Earth were a grape, Jupiter would be a basketball.",
        "You could fit 1,300 Earths inside Jupiter.",
        "It orbits 5.2 AU from the Sun (778 million km).",
        "Despite its size, it rotates so fast that it bulges significantly at the equator."
    ],
    "Saturn": [
        "Saturn's diameter is 9 times that of Earth.",
        "Its rings extend up to 282,000 km from the planet but are only about 10 meters thick in places.",
        "It orbits at 9.5 AU, roughly 1.4 billion km from the Sun.",
        "Saturn is 95 times more massive than Earth."
    ],
    "Uranus": [
        "Uranus is 4 times wider than Earth.",
        "It is a massive 19.2 AU from the Sun (2.9 billion km).",
        "Sunlight takes 2 hours and 40 minutes to reach Uranus.",
        "63 Earths could fit inside Uranus."
    ],
    "Neptune": [
        "Neptune is roughly 3.9 times wider than Earth.",
        "It orbits at 30 AU, which is 4.5 billion km from the Sun.",
        "Neptune is 50% further from the Sun than Uranus.",
        "It is 17 times more massive than Earth."
    ],
    "Pluto": [
        "Pluto is tiny; its diameter is only 2,376 km, which is smaller than Earth's Moon (3,474 km).",
        "It orbits at an average of 39 AU, or 5.9 billion km from the Sun.",
        "Its mass is only 0.2% of Earth's mass.",
        "At its furthest (aphelion), it is 49 AU from the Sun."
    ],
    "Haumea": [
        "Haumea is shaped like a flattened egg; its longest dimension is about 1,960 km (near Pluto's size).",
        "Its shortest dimension is only about 996 km.",
        "It orbits at 43 AU from the Sun.",
        "Its mass is about one-third that of Pluto."
    ],
    "Makemake": [
        "Makemake has a diameter of approx 1,430 km, about 2/3 the size of Pluto.",
        "It is 45.8 AU from the Sun, further out than Pluto.",
        "It takes 306 Earth years to complete one orbit.",
        "It is the second-brightest object in the Kuiper Belt."
    ],
    "Eris": [
        "Eris is almost the same size as Pluto (diameter 2,326 km) but is 27% more massive.",
        "It is extremely far away, currently 96 AU from the Sun.",
        "Sunlight takes more than 13 hours to travel to Eris.",
        "It is the most massive known dwarf planet in the solar system."
    ],
}

NO_DATA_MESSAGE = "No data available in local database."
DEEP_SCAN_OFFLINE = "Ship computer offline. Unable to access neural network."
CHAT_OFFLINE = "Ship computer offline. Unable to establish communications."
